import logging

logger = logging.getLogger(__name__)


def format_progress(index, total, action, calculated_score, depth):
    return f"info branch {index}/{total} action {action} score {calculated_score:.4f} depth {depth}"


def log_progress(index, total, action, calculated_score, depth):
    """Observer for SearchEngine that writes one INFO line per root branch."""
    logger.info(format_progress(index, total, action, calculated_score, depth))
