# region Docstring
"""
pasterbar_services.clipboard
Access to the system clipboard: change counter, payload reads, and write-back.
Overview:
- Defines the backend contract the change detector and the write-back path use.
- Provides the system backend (pyperclip for text, Pillow's ImageGrab for images,
    platform helpers for file references) and an in-process backend for tests and
    headless use.
Contents:
- Classes:
    - ClipboardBackend:
        Abstract contract. `change_count()` returns an opaque integer that changes
        whenever the clipboard contents change; `read_payload()` returns a
        ClipboardPayload; `write_text/write_image/write_file` place content back on
        the clipboard and return False on failure instead of raising.
    - SystemClipboard:
        OS clipboard. The change counter is derived by fingerprinting each sample
        and bumping an internal counter whenever the fingerprint differs.
    - MemoryClipboard:
        In-process clipboard with an explicit counter bumped on every write.
Design Notes:
- Read failures (no clipboard mechanism, grab errors) are logged at DEBUG and
    reported as an empty payload.
- ImageGrab only reports file lists on Windows. Elsewhere file references are read
    with osascript (macOS, the first file only) or as a text/uri-list through
    wl-paste/xclip (Linux).
- Image and file write-back use the same helpers (osascript on macOS, wl-copy/xclip
    on Linux); where none is available the path is copied as text. macOS receives
    PNG data, so other image formats are converted first.
"""
# endregion
# region Imports
import hashlib
import shutil
import subprocess
import sys
import tempfile
import threading
from abc import ABC, abstractmethod
from io import BytesIO
from logging import Logger
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import pyperclip
from PIL import Image, ImageGrab

from pasterbar_core.logger import get_logger

from .models import ClipboardPayload

URI_LIST = "text/uri-list"
_FILE_REFERENCE_SCRIPT = "POSIX path of (the clipboard as «class furl»)"

# endregion
# region ClipboardBackend


class ClipboardBackend(ABC):
    """Contract between the watcher and a clipboard implementation."""

    @abstractmethod
    def change_count(self) -> int:
        """Opaque counter that changes whenever the clipboard contents change."""

    @abstractmethod
    def read_payload(self) -> ClipboardPayload:
        """Current clipboard contents."""

    @abstractmethod
    def write_text(self, text: str) -> bool:
        """Place a literal string on the clipboard."""

    @abstractmethod
    def write_image(self, path: Path) -> bool:
        """Place the pixel data of an image file on the clipboard."""

    @abstractmethod
    def write_file(self, path: Path) -> bool:
        """Place a file reference on the clipboard."""


# endregion
# region MemoryClipboard


class MemoryClipboard(ClipboardBackend):
    """
    In-process clipboard. Every write replaces the payload and bumps the counter.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0
        self._payload = ClipboardPayload()

    def change_count(self) -> int:
        with self._lock:
            return self._count

    def read_payload(self) -> ClipboardPayload:
        with self._lock:
            return self._payload.model_copy()

    def set_payload(self, payload: ClipboardPayload) -> None:
        with self._lock:
            self._payload = payload
            self._count += 1

    def set_text(self, text: str) -> None:
        self.set_payload(ClipboardPayload(text=text))

    def set_files(self, *paths) -> None:
        self.set_payload(ClipboardPayload(file_paths=list(paths)))

    def set_images(self, *images: Image.Image) -> None:
        self.set_payload(ClipboardPayload(images=list(images)))

    def clear(self) -> None:
        self.set_payload(ClipboardPayload())

    def write_text(self, text: str) -> bool:
        self.set_text(text)
        return True

    def write_image(self, path: Path) -> bool:
        try:
            with Image.open(path) as image:
                image.load()
                copy = image.copy()
        except OSError:
            return False
        self.set_images(copy)
        return True

    def write_file(self, path: Path) -> bool:
        self.set_files(path)
        return True


# endregion
# region SystemClipboard


class SystemClipboard(ClipboardBackend):
    """
    The operating system clipboard.
    """

    def __init__(self, logger: Optional[Logger] = None, platform: Optional[str] = None):
        """
        Args:
            logger (Logger): Parent logger; logs under a "SystemClipboard" child.
            platform (str): `sys.platform` value selecting the helper tools.
                Defaults to the running platform.
        """
        self.logger = (logger or get_logger()).getChild("SystemClipboard")
        self.platform = platform or sys.platform
        self._count = 0
        self._fingerprint: Optional[str] = None

    # region Reads
    def _grab(self):
        try:
            return ImageGrab.grabclipboard()
        except (OSError, NotImplementedError, ValueError) as e:
            self.logger.debug(f"Image/file clipboard read failed: {e}")
            return None

    def _paste(self) -> Optional[str]:
        try:
            return pyperclip.paste() or None
        except pyperclip.PyperclipException as e:
            self.logger.debug(f"Text clipboard read failed: {e}")
            return None

    def _capture(self, cmd: list[str]) -> Optional[str]:
        try:
            result = subprocess.run(cmd, check=True, capture_output=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug(f"Clipboard helper {cmd[0]} read failed: {e}")
            return None
        return result.stdout.decode("utf-8", "replace")

    def _read_file_references(self) -> list[Path]:
        """File references on platforms where ImageGrab does not report them."""
        if self.platform == "darwin":
            output = self._capture(["osascript", "-e", _FILE_REFERENCE_SCRIPT])
            path = output.strip() if output else ""
            return [Path(path)] if path else []
        if self.platform.startswith("linux"):
            output = None
            if shutil.which("wl-paste"):
                output = self._capture(["wl-paste", "--no-newline", "--type", URI_LIST])
            if output is None and shutil.which("xclip"):
                output = self._capture(
                    ["xclip", "-selection", "clipboard", "-t", URI_LIST, "-o"]
                )
            return parse_uri_list(output) if output else []
        return []

    def read_payload(self) -> ClipboardPayload:
        grabbed = self._grab()
        file_paths: list = []
        images: list = []
        if isinstance(grabbed, list):
            file_paths = [p for p in grabbed if isinstance(p, str) and p]
        elif isinstance(grabbed, Image.Image):
            images = [grabbed]
        if not file_paths:
            file_paths = self._read_file_references()
        return ClipboardPayload(file_paths=file_paths, images=images, text=self._paste())

    @staticmethod
    def fingerprint(payload: ClipboardPayload) -> str:
        digest = hashlib.sha256()
        for path in payload.file_paths:
            digest.update(b"F" + str(path).encode("utf-8", "surrogatepass"))
        for image in payload.images:
            digest.update(b"I" + f"{image.mode}{image.size}".encode())
            digest.update(image.tobytes())
        if payload.text:
            digest.update(b"T" + payload.text.encode("utf-8", "surrogatepass"))
        return digest.hexdigest()

    def change_count(self) -> int:
        fingerprint = self.fingerprint(self.read_payload())
        if fingerprint != self._fingerprint:
            self._fingerprint = fingerprint
            self._count += 1
        return self._count

    # endregion
    # region Writes
    def write_text(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            self.logger.error(f"Failed to write text to the clipboard: {e}")
            return False
        return True

    def _run(self, cmd: list[str], stdin: Optional[bytes] = None) -> bool:
        try:
            subprocess.run(cmd, input=stdin, check=True, capture_output=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug(f"Clipboard helper {cmd[0]} failed: {e}")
            return False
        return True

    def _load_png(self, path: Path) -> Optional[bytes]:
        try:
            with Image.open(path) as image:
                return _encode_png(image)
        except OSError as e:
            self.logger.warning(f"Failed to read image {path}: {e}")
            return None

    def _write_png_macos(self, path: Path) -> bool:
        script = (
            f"set the clipboard to (read (POSIX file {applescript_string(path.as_posix())})"
            " as «class PNGf»)"
        )
        return self._run(["osascript", "-e", script])

    def write_image(self, path: Path) -> bool:
        path = Path(path)
        if not path.is_file():
            self.logger.warning(f"Image file no longer exists: {path}")
            return False
        if self.platform == "darwin":
            if path.suffix.lower() == ".png":
                if self._write_png_macos(path):
                    return True
            else:
                png = self._load_png(path)
                if png is None:
                    return False
                with tempfile.TemporaryDirectory(prefix="pasterbar-") as tmp:
                    converted = Path(tmp) / f"{path.stem}.png"
                    converted.write_bytes(png)
                    if self._write_png_macos(converted):
                        return True
        elif self.platform.startswith("linux"):
            png = self._load_png(path)
            if png is None:
                return False
            if shutil.which("wl-copy") and self._run(["wl-copy", "--type", "image/png"], png):
                return True
            if shutil.which("xclip") and self._run(
                ["xclip", "-selection", "clipboard", "-t", "image/png", "-i"], png
            ):
                return True
        return self.write_text(str(path))

    def write_file(self, path: Path) -> bool:
        path = Path(path)
        if self.platform == "darwin":
            script = f"set the clipboard to (POSIX file {applescript_string(path.as_posix())})"
            if self._run(["osascript", "-e", script]):
                return True
        elif self.platform.startswith("linux"):
            uri = path.absolute().as_uri().encode()
            if shutil.which("wl-copy") and self._run(["wl-copy", "--type", URI_LIST], uri):
                return True
            if shutil.which("xclip") and self._run(
                ["xclip", "-selection", "clipboard", "-t", URI_LIST, "-i"], uri
            ):
                return True
        return self.write_text(str(path))

    # endregion


def _encode_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def applescript_string(value: str) -> str:
    """Quote a value as an AppleScript string literal."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def parse_uri_list(text: str) -> list[Path]:
    """Local paths from a text/uri-list body; comments and non-file URIs are skipped."""
    paths = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        uri = urlparse(line)
        if uri.scheme != "file" or uri.netloc not in ("", "localhost"):
            continue
        paths.append(Path(unquote(uri.path)))
    return paths


# endregion
__all__ = [
    "ClipboardBackend",
    "MemoryClipboard",
    "SystemClipboard",
    "applescript_string",
    "parse_uri_list",
]
