import logging

LOGGER = logging.getLogger("cubeviz")
