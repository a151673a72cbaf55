# core/logger.py
import logging

logger = logging.getLogger("staylinker")
logger.setLevel(logging.INFO)  # Change to DEBUG for development

# Console Handler
console_handler = logging.StreamHandler()
formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s")
console_handler.setFormatter(formatter)

logger.addHandler(console_handler)
