"""Download-based installer for the binaries eksctl-wrap depends on.

Binaries are fetched with ``requests`` into the managed bin directory
(``$EKSCTL_WRAP_HOME/bin``), which is searched ahead of PATH.  Every
``requests``, archive and filesystem failure is re-raised as
:class:`~eksctl_wrap.exceptions.DependencyInstallError`.

Progress is reported through an optional callback receiving dicts with
``"status"`` (``"downloading"`` / ``"finished"``), ``"filename"``,
``"downloaded_bytes"`` and ``"total_bytes"``.
"""

from __future__ import annotations

import logging
import platform
import shutil
import stat
import tarfile
import tempfile
import zipfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from eksctl_wrap.config import Settings
from eksctl_wrap.exceptions import DependencyInstallError, EnvironmentError
from eksctl_wrap.infra.binaries import detect_binary

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[dict[str, Any]], None]

EKSCTL_RELEASE_URL: str = (
    "https://github.com/eksctl-io/eksctl/releases/latest/download/eksctl_{system}_{arch}.{ext}"
)
AUTHENTICATOR_RELEASE_URL: str = (
    "https://github.com/kubernetes-sigs/aws-iam-authenticator/releases/download/"
    "v{version}/aws-iam-authenticator_{version}_{os}_{arch}{suffix}"
)
KUBECTL_STABLE_URL: str = "https://dl.k8s.io/release/stable.txt"
KUBECTL_RELEASE_URL: str = "https://dl.k8s.io/release/{version}/bin/{os}/{arch}/kubectl{suffix}"

_CHUNK_SIZE: int = 64 * 1024

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """Operating system and CPU architecture in release-asset spelling."""

    os: str
    """``linux``, ``darwin`` or ``windows``."""

    arch: str
    """``amd64`` or ``arm64``."""

    @property
    def exe_suffix(self) -> str:
        return ".exe" if self.os == "windows" else ""


def current_platform() -> PlatformInfo:
    """Detect the running platform.

    Raises
    ------
    DependencyInstallError
        For operating systems or architectures without release assets.
    """
    system = platform.system().lower()
    if system not in ("linux", "darwin", "windows"):
        raise DependencyInstallError(f"Unsupported operating system: {platform.system()}")
    machine = platform.machine().lower()
    arch = _ARCH_ALIASES.get(machine)
    if arch is None:
        raise DependencyInstallError(f"Unsupported CPU architecture: {platform.machine()}")
    return PlatformInfo(os=system, arch=arch)


def _import_requests() -> Any:
    """Import requests lazily so detection paths work without it."""
    try:
        import requests
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "requests is not installed. Install with: pip install requests",
        ) from exc
    return requests


# ---------------------------------------------------------------------------
# Installer
# ---------------------------------------------------------------------------

class BinaryInstaller:
    """Install ``eksctl``, ``aws-iam-authenticator`` and ``kubectl``.

    Parameters
    ----------
    settings:
        Supplies the managed bin directory and pinned versions.
    session:
        Optional ``requests.Session``-compatible object; one is created
        on first use when omitted.
    platform_info:
        Overrides platform detection.
    timeout:
        Per-request timeout in seconds.
    """

    SUPPORTED: tuple[str, ...] = ("eksctl", "aws-iam-authenticator", "kubectl")

    def __init__(
        self,
        settings: Settings,
        *,
        session: Any | None = None,
        platform_info: PlatformInfo | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._settings = settings
        self._session = session
        self._platform = platform_info
        self._timeout = timeout

    @property
    def bin_dir(self) -> Path:
        return self._settings.bin_dir

    def should_install(self, binary: str) -> bool:
        """Return ``True`` when *binary* is neither managed nor on PATH."""
        return not detect_binary(binary, bin_dir=self.bin_dir).found

    # ------------------------------------------------------------------
    # URL resolution
    # ------------------------------------------------------------------

    def download_url(self, binary: str) -> tuple[str, str]:
        """Return ``(url, kind)`` where *kind* is ``tar.gz``, ``zip`` or ``binary``."""
        info = self._platform_info()
        if binary == "eksctl":
            ext = "zip" if info.os == "windows" else "tar.gz"
            url = EKSCTL_RELEASE_URL.format(
                system=info.os.capitalize(), arch=info.arch, ext=ext,
            )
            return url, ext
        if binary == "aws-iam-authenticator":
            url = AUTHENTICATOR_RELEASE_URL.format(
                version=self._settings.authenticator_version,
                os=info.os,
                arch=info.arch,
                suffix=info.exe_suffix,
            )
            return url, "binary"
        if binary == "kubectl":
            url = KUBECTL_RELEASE_URL.format(
                version=self._kubectl_stable_version(),
                os=info.os,
                arch=info.arch,
                suffix=info.exe_suffix,
            )
            return url, "binary"
        raise DependencyInstallError(
            f"Don't know how to install {binary}.",
            hint="Install it manually and make sure it is on your PATH.",
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def install(
        self,
        binary: str,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> Path:
        """Download *binary* into the managed bin directory.

        Returns
        -------
        Path
            Location of the installed, executable binary.

        Raises
        ------
        DependencyInstallError
            For network, archive or filesystem failures.
        """
        url, kind = self.download_url(binary)
        target = self.bin_dir / f"{binary}{self._platform_info().exe_suffix}"
        logger.debug("Downloading %s from %s", binary, url)

        try:
            self.bin_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.TemporaryDirectory(dir=self.bin_dir) as tmp:
                download = Path(tmp) / url.rsplit("/", 1)[-1]
                self._download(url, download, binary, progress_callback)
                if kind == "binary":
                    shutil.move(str(download), target)
                else:
                    _extract_member(download, kind, target.name, target)
            _make_executable(target)
        except OSError as exc:
            raise DependencyInstallError(
                f"Could not install {binary} into {self.bin_dir}: {exc}",
            ) from exc

        logger.info("Installed %s to %s", binary, target)
        return target

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _platform_info(self) -> PlatformInfo:
        if self._platform is None:
            self._platform = current_platform()
        return self._platform

    def _http(self) -> Any:
        if self._session is None:
            self._session = _import_requests().Session()
        return self._session

    def _kubectl_stable_version(self) -> str:
        requests = _import_requests()
        try:
            response = self._http().get(KUBECTL_STABLE_URL, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DependencyInstallError(
                f"Could not determine the stable kubectl version: {exc}",
            ) from exc
        version = response.text.strip()
        if not version:
            raise DependencyInstallError(
                f"Empty kubectl version returned by {KUBECTL_STABLE_URL}",
            )
        return version

    def _download(
        self,
        url: str,
        destination: Path,
        binary: str,
        progress_callback: ProgressCallback | None,
    ) -> None:
        requests = _import_requests()
        downloaded = 0
        total: int | None = None
        try:
            with self._http().get(url, stream=True, timeout=self._timeout) as response:
                response.raise_for_status()
                total = _safe_int(response.headers.get("Content-Length"))
                with destination.open("wb") as fh:
                    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        downloaded += len(chunk)
                        _notify(progress_callback, {
                            "status": "downloading",
                            "filename": binary,
                            "downloaded_bytes": downloaded,
                            "total_bytes": total,
                        })
        except requests.RequestException as exc:
            raise DependencyInstallError(
                f"Failed to download {binary}: {exc}",
                hint=f"Check your network connection or download {url} manually.",
            ) from exc

        _notify(progress_callback, {
            "status": "finished",
            "filename": binary,
            "downloaded_bytes": downloaded,
            "total_bytes": total,
        })


# ---------------------------------------------------------------------------
# Archive / filesystem helpers
# ---------------------------------------------------------------------------

def _extract_member(archive: Path, kind: str, member_name: str, target: Path) -> None:
    """Copy the file called *member_name* out of *archive* to *target*."""
    try:
        if kind == "tar.gz":
            with tarfile.open(archive, "r:gz") as tar:
                member = next(
                    (
                        m for m in tar.getmembers()
                        if m.isfile() and Path(m.name).name == member_name
                    ),
                    None,
                )
                source = tar.extractfile(member) if member is not None else None
                if source is None:
                    raise DependencyInstallError(
                        f"{member_name} not found in {archive.name}",
                    )
                with source, target.open("wb") as out:
                    shutil.copyfileobj(source, out)
        elif kind == "zip":
            with zipfile.ZipFile(archive) as zf:
                info = next(
                    (
                        i for i in zf.infolist()
                        if not i.is_dir() and Path(i.filename).name == member_name
                    ),
                    None,
                )
                if info is None:
                    raise DependencyInstallError(
                        f"{member_name} not found in {archive.name}",
                    )
                with zf.open(info) as source, target.open("wb") as out:
                    shutil.copyfileobj(source, out)
        else:
            raise DependencyInstallError(f"Unsupported archive type: {kind}")
    except (tarfile.TarError, zipfile.BadZipFile) as exc:
        raise DependencyInstallError(
            f"Corrupt archive {archive.name}: {exc}",
        ) from exc


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _notify(callback: ProgressCallback | None, event: dict[str, Any]) -> None:
    if callback is not None:
        callback(event)


def _safe_int(value: object) -> int | None:
    """Convert *value* to ``int`` or return ``None``."""
    if value is None:
        return None
    try:
        return int(str(value))
    except (TypeError, ValueError):
        return None
