import logging


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_rule_violation(
    logger: logging.Logger,
    entity_id: str,
    field_name: str,
    message: str,
    level: int = logging.WARNING,
) -> None:
    """진단 채널 기록. entity_id / field_name은 LogRecord extra로도 첨부."""
    logger.log(
        level,
        f"{message} (entity={entity_id}, field={field_name})",
        extra={"entity_id": entity_id, "field_name": field_name},
    )
