from __future__ import annotations
from PyQt6.QtCore import QObject, pyqtSignal


class AppLogger(QObject):
    message_logged = pyqtSignal(str, str)  # category, message

    def __init__(self, quiet: bool = False, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._quiet = quiet

    def log(self, category: str, message: str) -> None:
        if not self._quiet:
            print(f"[{category}] {message}", flush=True)
        self.message_logged.emit(category, message)

    def midi(self, message: str) -> None:
        self.log("MIDI", message)

    def random(self, message: str) -> None:
        self.log("RANDOM", message)

    def general(self, message: str) -> None:
        self.log("GENERAL", message)
