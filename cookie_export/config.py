#!/usr/bin/env python3
"""
Centralized configuration management for cookie export
"""

import os
import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional, Union

from dotenv import load_dotenv

# Load environment variables from a local .env, if any
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Centralized configuration constants and environment management"""

    # Label prepended to a host to probe for Domain= cookies during export
    DEFAULT_PROBE_LABEL = "sloppy"

    # Scheme classes a scope key can carry
    SECURE_SCHEME = "https"
    INSECURE_SCHEME = "http"

    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @staticmethod
    def get_probe_label() -> str:
        """Get the synthetic subdomain label used for export probing"""
        label = os.getenv('COOKIE_EXPORT_PROBE_LABEL', Config.DEFAULT_PROBE_LABEL).strip()
        return label.strip('.') or Config.DEFAULT_PROBE_LABEL

    @staticmethod
    def get_psl_settings() -> Dict[str, bool]:
        """Get public suffix list lookup settings"""
        return {
            'include_private_domains': _env_flag('COOKIE_EXPORT_PSL_PRIVATE_DOMAINS'),
            'online': _env_flag('COOKIE_EXPORT_PSL_ONLINE'),
        }

    @staticmethod
    def get_log_level() -> int:
        """Get the configured log level, falling back to INFO"""
        level_name = os.getenv('COOKIE_EXPORT_LOG_LEVEL', 'INFO').upper()
        level = logging.getLevelName(level_name)
        return level if isinstance(level, int) else logging.INFO

    @staticmethod
    def validate_environment() -> Dict[str, Union[str, bool]]:
        """Return the effective settings after environment overrides"""
        psl = Config.get_psl_settings()
        return {
            'probe_label': Config.get_probe_label(),
            'psl_private_domains': psl['include_private_domains'],
            'psl_online': psl['online'],
            'log_level': logging.getLevelName(Config.get_log_level()),
        }

    @staticmethod
    def setup_logging(session_name: str, log_dir: Optional[Path] = None) -> logging.Logger:
        """
        Set up logging for an export session

        Args:
            session_name: Name for this session (e.g., 'ExportDemo')
            log_dir: Optional directory for a dated log file

        Returns:
            Configured logger instance
        """
        handlers = [logging.StreamHandler()]

        log_file = None
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            log_filename = f"{session_name.lower()}_{datetime.now().strftime('%Y%m%d')}.log"
            log_file = log_dir / log_filename
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

        logging.basicConfig(
            level=Config.get_log_level(),
            format=Config.LOG_FORMAT,
            handlers=handlers
        )

        logger = logging.getLogger(session_name)
        if log_file:
            logger.info(f"{session_name} initialized. Log file: {log_file}")
        else:
            logger.info(f"{session_name} initialized")

        return logger
