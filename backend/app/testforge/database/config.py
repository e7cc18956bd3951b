"""TestForge - Database Configuration

数据库连接配置
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from testforge.core.config import Settings

# 创建 Base 类
Base = declarative_base()

# Session 工厂（engine 由 configure_database 绑定）
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def create_db_engine(database_url: str) -> Engine:
    """创建引擎"""
    return create_engine(
        database_url,
        echo=False,
        # SQLite 特殊配置
        connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )


def configure_database(settings: Settings) -> Engine:
    """绑定引擎并建表（进程启动时调用一次）"""
    from testforge.database import models  # noqa: F401 - 注册模型

    engine = create_db_engine(settings.DATABASE_URL)
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(bind=engine)
    return engine


def get_db():
    """获取数据库会话（依赖注入）"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
