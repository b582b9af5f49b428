from __future__ import annotations

import logging
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from clangd_cdb.config.repository import ConfigRepository
from clangd_cdb.service import CompileCommandsService

logger = logging.getLogger(__name__)


class ConfigChangeHandler(FileSystemEventHandler):
    """
    Forwards changes of the project's config file to the service.
    """

    def __init__(self, service: CompileCommandsService, repository: ConfigRepository) -> None:
        self.service = service
        self.repository = repository
        self.config_path = repository.config_path

    def _is_config(self, path: str | bytes) -> bool:
        if not path:
            return False
        if isinstance(path, bytes):
            path = path.decode()
        return self.repository.is_config_path(path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_config(event.src_path):
            self.service.reload_config(self.config_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_config(event.src_path):
            self.service.reload_config(self.config_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_config(event.src_path):
            self.service.clear_config()

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if self._is_config(event.dest_path):
            self.service.reload_config(self.config_path)
        elif self._is_config(event.src_path):
            self.service.clear_config()


class ConfigWatcher:
    """
    Manages the watchdog observer thread for one project.
    """

    def __init__(self, service: CompileCommandsService) -> None:
        if service.repository is None:
            raise ValueError("Service has no active project")
        self.service = service
        self.config_path = service.repository.config_path
        self.handler = ConfigChangeHandler(service, service.repository)
        self.observer: Optional[Observer] = None

    def start(self) -> None:
        if self.observer is not None:
            return
        self.observer = Observer()
        self.observer.schedule(self.handler, str(self.config_path.parent), recursive=False)
        self.observer.start()
        logger.info("Watching %s", self.config_path)

    def stop(self) -> None:
        if self.observer is None:
            return
        if self.observer.is_alive():
            self.observer.stop()
            self.observer.join()
        self.observer = None
