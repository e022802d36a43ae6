"""Resource loaders for the bundled default configuration."""

from importlib import resources
from pathlib import Path
from typing import BinaryIO, Union

from .errors import ResourceNotFoundError
from .interfaces import IResourceLoader

DEFAULT_PACKAGE = "settingsstore"


class PackageResourceLoader(IResourceLoader):
    """Loads resources shipped inside an importable package.

    Usage:
        loader = PackageResourceLoader("myapp")
        with loader.open("config.properties") as f:
            data = f.read()
    """

    def __init__(self, package: str = DEFAULT_PACKAGE):
        self.package = package

    def open(self, name: str) -> BinaryIO:
        try:
            resource = resources.files(self.package).joinpath(name)
        except ModuleNotFoundError as e:
            raise ResourceNotFoundError(name, self.package) from e
        if not resource.is_file():
            raise ResourceNotFoundError(name, self.package)
        return resource.open("rb")

    def describe(self) -> str:
        return f"package {self.package}"


class DirectoryResourceLoader(IResourceLoader):
    """Loads resources from a directory on the filesystem."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    def open(self, name: str) -> BinaryIO:
        path = self.root / name
        try:
            return open(path, "rb")
        except (FileNotFoundError, IsADirectoryError) as e:
            raise ResourceNotFoundError(name, str(self.root)) from e

    def describe(self) -> str:
        return f"directory {self.root}"
