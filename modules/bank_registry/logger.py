"""
Bank Registry Module Logger
Logs für den Bundesbank-Import und Bank-Lookups
"""
import logging
from modules.shared.logging import create_module_logger

# BANK_REGISTRY Logger: INFO+ → logs/bank_registry/bank_registry.log, ERROR+ → Console
bank_logger = create_module_logger(
    module_name='BANK_REGISTRY',
    log_subdir='bank_registry',
    console_level=logging.ERROR,
    file_level=logging.INFO,
    file_name='bank_registry.log'
)
