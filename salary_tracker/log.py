import logging

from salary_tracker import LOG_LEVEL

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the root logger once. Streamlit reruns the entry script on every interaction, so existing handlers
    only get their formatter replaced instead of being stacked.

    Parameters
    ----------
    level : str | None
        The log level name. Defaults to the ``SALARY_TRACKER_LOG_LEVEL`` environment value.

    Returns
    -------
    logging.Logger
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(level or LOG_LEVEL)
    formatter = logging.Formatter(LOG_FORMAT)
    if root.handlers:
        for handler in root.handlers:
            handler.setFormatter(formatter)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root
