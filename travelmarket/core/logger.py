# core/logger.py
import logging

logger = logging.getLogger("travelmarket")
logger.setLevel(logging.INFO)  # Change to DEBUG for development

console_handler = logging.StreamHandler()
formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s")
console_handler.setFormatter(formatter)

logger.addHandler(console_handler)
