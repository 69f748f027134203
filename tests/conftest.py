"""Pytest configuration for requirefs tests."""

import io
import tarfile
import zipfile

import pytest
from requirefs import MemorySource
from requirefs import ModuleLoader

# Module tree shared by the loader, source and CLI tests. Bodies are Python,
# run by the default PythonExecutor.
LIB_FILES = {
    "index.js": 'module.exports = "root"',
    "individual.js": 'exports["frog"] = "hi"',
    "chained-1.js": 'module.exports = require("./chained-2")',
    "chained-2.js": 'module.exports = require("./chained-3")',
    "chained-3.js": 'exports["text"] = "moo"',
    "nodeResolve.js": 'module.exports = require("frogger")',
    "customModule.js": 'module.exports = require("donkey")',
    "scope.js": 'module.exports = coder["test"]',
    "tsFile.ts": 'exports["obi"] = "Why, hello there!"',
    "requirePath.js": 'module.exports = require("posixpath")',
    "function.js": 'def fn():\n    return "function"\n\nmodule.exports = {"test": "test", "fn": fn()}\n',
    "circular.js": (
        'exports["circular"] = "hello"\n'
        'ralucric = require("./ralucric")\n'
        'exports["ralucric"] = ralucric["ralucric"]\n'
    ),
    "ralucric.js": 'circular = require("./circular")\nexports["ralucric"] = circular["circular"]\n',
    "baseFolder/index.js": 'exports["base"] = True',
    "baseFolder/baseModule.js": 'exports["name"] = "baseModule"',
    "subfolder/package.json": '{"name": "subfolder", "main": "lib/entry"}',
    "subfolder/lib/entry.js": 'exports["orange_color"] = "blue"',
    "subfolder/goingUp.js": 'module.exports = require("../individual")',
    "subfolder/deepfolder/nodeResolveNested.js": 'module.exports = require("frogger")',
    "subfolder/deepfolder/nodeResolveOverload.js": 'module.exports = require("overload")',
    "subfolder/node_modules/overload/index.js": 'module.exports = "local value"',
    "node_modules/overload/index.js": 'module.exports = "root value"',
    "node_modules/frogger/index.js": 'exports["banana"] = "potato"',
    "node_modules/custom-overload/package.json": '{"main": "custom-overload.js"}',
    "node_modules/custom-overload/custom-overload.js": 'exports["custom"] = True',
    "data/config.yaml": "name: demo\nitems:\n  - 1\n  - 2\n",
    "data/settings.json": '{"debug": false, "level": 3}',
    "data/broken.json": "{not json",
}


def build_tar(files: dict[str, str], compression: str = "") -> bytes:
    """Build a tar archive the way `tar -C lib .` lays it out."""
    buffer = io.BytesIO()
    mode = f"w:{compression}" if compression else "w"
    with tarfile.open(fileobj=buffer, mode=mode) as archive:
        directories = sorted({path.rsplit("/", 1)[0] for path in files if "/" in path})
        for directory in directories:
            info = tarfile.TarInfo(f"./{directory}/")
            info.type = tarfile.DIRTYPE
            archive.addfile(info)
        for path, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"./{path}")
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def build_zip(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("subfolder/", "")
        for path, content in files.items():
            archive.writestr(path, content)
    return buffer.getvalue()


@pytest.fixture
def lib_files():
    return dict(LIB_FILES)


@pytest.fixture
def lib_source(lib_files):
    return MemorySource(lib_files)


@pytest.fixture
def loader(lib_source):
    return ModuleLoader(lib_source)


@pytest.fixture
def tar_bytes(lib_files):
    return build_tar(lib_files)


@pytest.fixture
def tar_gz_bytes(lib_files):
    return build_tar(lib_files, compression="gz")


@pytest.fixture
def zip_bytes(lib_files):
    return build_zip(lib_files)


@pytest.fixture
def lib_archives(tmp_path, lib_files):
    """Write the module tree as a directory, a tar and a zip under tmp_path."""
    lib_dir = tmp_path / "lib"
    for path, content in lib_files.items():
        target = lib_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    tar_path = tmp_path / "lib.tar"
    tar_path.write_bytes(build_tar(lib_files))
    zip_path = tmp_path / "lib.zip"
    zip_path.write_bytes(build_zip(lib_files))

    return {"dir": lib_dir, "tar": tar_path, "zip": zip_path}
