"""
FileHub CLI

启动文件存储 HTTP 服务
"""

import sys
from typing import Optional

import click
import uvicorn
from pydantic import ValidationError

from config import Config, ConfigManager
from filehub import __version__
from filehub.api.logging_config import setup_logging
from filehub.api.main import create_app


def apply_overrides(
    config: Config,
    host: Optional[str] = None,
    port: Optional[int] = None,
    uploads_dir: Optional[str] = None,
    access_log: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Config:
    """
    用命令行参数覆盖配置

    Returns:
        新的配置对象（原对象不变）
    """
    data = config.model_dump()

    if host is not None:
        data["api"]["host"] = host
    if port is not None:
        data["api"]["port"] = port
    if uploads_dir is not None:
        data["storage"]["uploads_dir"] = uploads_dir
    if access_log is not None:
        data["storage"]["access_log"] = access_log
    if log_level is not None:
        data["logging"]["level"] = log_level

    return Config(**data)


@click.command()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None, help="YAML 配置文件路径")
@click.option("--host", default=None, help="监听地址")
@click.option("--port", type=int, default=None, help="监听端口（默认 8080）")
@click.option("--uploads-dir", default=None, help="文件存储根目录")
@click.option("--access-log", default=None, help="访问日志文件路径")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="诊断日志级别",
)
def serve(
    config_path: Optional[str],
    host: Optional[str],
    port: Optional[int],
    uploads_dir: Optional[str],
    access_log: Optional[str],
    log_level: Optional[str],
):
    """启动 FileHub 文件存储服务"""
    try:
        config = apply_overrides(
            ConfigManager(config_path).load(),
            host=host,
            port=port,
            uploads_dir=uploads_dir,
            access_log=access_log,
            log_level=log_level,
        )
    except ValidationError as e:
        click.echo(f"❌ 配置无效: {e}", err=True)
        sys.exit(1)

    setup_logging(
        log_level=config.logging.level,
        log_file=config.logging.file,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        fmt=config.logging.format,
    )

    app = create_app(config)

    uvicorn.run(
        app,
        host=config.api.host,
        port=config.api.port,
        log_config=None,
    )


# 主入口
def main():
    """CLI 主入口"""
    serve()


if __name__ == "__main__":
    main()
