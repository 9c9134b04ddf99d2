"""
AUTO-UPDATE DASHBOARD SERVICE
Monitors the config file and regenerates the dashboard when it changes.
Every rebuild draws a fresh sample batch.
"""

import os
import time
import logging
from typing import Callable, Optional

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from .dashboard_app import run_dashboard_app

logger = logging.getLogger(__name__)


class ConfigFileHandler(FileSystemEventHandler):
    """Handles file system events for the dashboard config file"""

    def __init__(self, config_path: str, rebuild: Optional[Callable] = None):
        self.config_path = os.path.abspath(config_path)
        self.rebuild = rebuild or run_dashboard_app
        self.processing = False
        self.rebuild_count = 0

    def _is_config_event(self, event) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", None)]
        return any(p and os.path.abspath(p) == self.config_path for p in paths)

    def on_modified(self, event):
        """Triggered when a file is modified"""
        if self._is_config_event(event):
            self.regenerate()

    def on_created(self, event):
        """Editors that save via rename re-create the file"""
        if self._is_config_event(event):
            self.regenerate()

    def on_moved(self, event):
        if self._is_config_event(event):
            self.regenerate()

    def regenerate(self):
        """Rebuild the dashboard, dropping events that arrive mid-rebuild"""
        if self.processing:
            return

        self.processing = True
        logger.info(f"📂 Config change detected: {os.path.basename(self.config_path)}")
        try:
            files = self.rebuild(self.config_path)
            self.rebuild_count += 1
            logger.info(f"✅ Dashboard regenerated ({len(files)} files)")
        except Exception:
            logger.exception("❌ Error during dashboard regeneration")
        finally:
            self.processing = False


def watch_config(config_path: str = "config.yaml", poll_interval: float = 1.0):
    """
    Watch the config file and regenerate the dashboard until interrupted

    Args:
        config_path: Path to configuration file
        poll_interval: Seconds between liveness checks of the observer
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    handler = ConfigFileHandler(config_path)
    watch_dir = os.path.dirname(handler.config_path)

    observer = Observer()
    observer.schedule(handler, watch_dir, recursive=False)
    observer.start()

    logger.info("=" * 60)
    logger.info(f"👀 Watching {handler.config_path} for changes (Ctrl+C to stop)")
    logger.info("=" * 60)

    try:
        while observer.is_alive():
            time.sleep(poll_interval)
    except KeyboardInterrupt:
        logger.info("Stopping watcher...")
    finally:
        observer.stop()
        observer.join()

    return handler.rebuild_count
