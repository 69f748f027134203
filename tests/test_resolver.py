"""Tests for Node-style path resolution."""

import pytest
from requirefs import MemorySource
from requirefs import PathResolver
from requirefs import ResolutionFailure


def make_resolver(*paths, extensions=None, files=None):
    contents = {path: "" for path in paths}
    contents.update(files or {})
    return PathResolver(MemorySource(contents), extensions=extensions)


class TestRelativeResolution:
    def test_resolves_with_default_extension(self):
        resolver = make_resolver("/lib/scope.js")

        assert resolver.resolve("./lib/scope", "/") == "/lib/scope.js"
        assert resolver.resolve("./scope", "/lib") == "/lib/scope.js"

    def test_moves_up_directories(self):
        resolver = make_resolver("/lib/baseFolder/baseModule.js", "/lib/subfolder/goingUp.js")

        assert resolver.resolve("../../baseFolder/baseModule", "/lib/subfolder/deepfolder") == (
            "/lib/baseFolder/baseModule.js"
        )
        assert resolver.resolve("../goingUp", "/lib/subfolder/deepfolder") == "/lib/subfolder/goingUp.js"

    def test_exact_file_beats_extension_probe(self):
        resolver = make_resolver("/a/x", "/a/x.js", "/a/y.js", "/a/y.js.js")

        assert resolver.resolve("./x", "/a") == "/a/x"
        assert resolver.resolve("./y.js", "/a") == "/a/y.js"

    def test_extensions_probed_in_configured_order(self):
        resolver = make_resolver("/a/mod.js", "/a/mod.ts", extensions=[".ts", ".js"])
        assert resolver.resolve("./mod", "/a") == "/a/mod.ts"

        resolver.extensions = [".js", ".ts"]
        assert resolver.resolve("./mod", "/a") == "/a/mod.js"

    def test_extensions_gain_leading_dot(self):
        resolver = make_resolver("/a/mod.ts", extensions=["ts"])

        assert resolver.extensions == [".ts"]
        assert resolver.resolve("./mod", "/a") == "/a/mod.ts"

    def test_extension_change_affects_later_resolutions_only(self):
        resolver = make_resolver("/a/mod.ts")
        with pytest.raises(ResolutionFailure):
            resolver.resolve("./mod", "/a")

        resolver.extensions = [".ts"]
        assert resolver.resolve("./mod", "/a") == "/a/mod.ts"

    def test_resolution_is_idempotent(self):
        resolver = make_resolver("/a/b/index.js", "/a/node_modules/pkg/index.js")

        assert resolver.resolve("./b", "/a") == resolver.resolve("./b", "/a")
        assert resolver.resolve("pkg", "/a/b") == resolver.resolve("pkg", "/a/b")


class TestDirectoryResolution:
    def test_index_file(self):
        resolver = make_resolver("/lib/baseFolder/index.js")
        assert resolver.resolve("./baseFolder", "/lib") == "/lib/baseFolder/index.js"

    def test_package_json_main_with_extension_probe(self):
        resolver = make_resolver(
            "/d/lib/entry.js", "/d/index.js", files={"/d/package.json": '{"main": "lib/entry"}'}
        )
        assert resolver.resolve("./d", "/") == "/d/lib/entry.js"

    def test_module_field_preferred_over_main(self):
        resolver = make_resolver(
            "/d/esm.js", "/d/cjs.js", files={"/d/package.json": '{"main": "cjs.js", "module": "esm.js"}'}
        )
        assert resolver.resolve("./d", "/") == "/d/esm.js"

    def test_missing_package_json_falls_back_to_index(self):
        resolver = make_resolver("/d/index.js")
        assert resolver.resolve("./d", "/") == "/d/index.js"

    def test_unparsable_package_json_falls_back_to_index(self):
        resolver = make_resolver("/d/index.js", files={"/d/package.json": "{ main: nope"})
        assert resolver.resolve("./d", "/") == "/d/index.js"

    def test_non_utf8_package_json_falls_back_to_index(self):
        resolver = PathResolver(MemorySource({"/d/index.js": "", "/d/package.json": b"\xff\xfe{"}))
        assert resolver.resolve("./d", "/") == "/d/index.js"

    def test_package_json_without_usable_entry_falls_back_to_index(self):
        resolver = make_resolver("/d/index.js", "/e/index.js", files={
            "/d/package.json": '{"name": "d", "main": 42}',
            "/e/package.json": '["not", "an", "object"]',
        })
        assert resolver.resolve("./d", "/") == "/d/index.js"
        assert resolver.resolve("./e", "/") == "/e/index.js"

    def test_main_naming_directory_uses_its_index(self):
        resolver = make_resolver("/d/dist/index.js", files={"/d/package.json": '{"main": "dist"}'})
        assert resolver.resolve("./d", "/") == "/d/dist/index.js"

    def test_main_directory_manifest_is_not_followed(self):
        resolver = make_resolver(
            "/d/dist/real.js",
            files={"/d/package.json": '{"main": "dist"}', "/d/dist/package.json": '{"main": "real.js"}'},
        )
        with pytest.raises(ResolutionFailure, match="Unable to resolve"):
            resolver.resolve("./d", "/")

    def test_trailing_slash_specifier_resolves_directory(self):
        resolver = make_resolver("/sub/index.js", "/sub.js")
        assert resolver.resolve("./sub/", "/") == "/sub/index.js"

    def test_current_directory_specifier(self):
        resolver = make_resolver("lib/index.js")
        assert resolver.resolve(".", "./lib") == "lib/index.js"


class TestPackageResolution:
    def test_finds_package_in_local_node_modules(self):
        resolver = make_resolver("/lib/node_modules/frogger/index.js")
        assert resolver.resolve("frogger", "/lib") == "/lib/node_modules/frogger/index.js"

    def test_package_main_field(self):
        resolver = make_resolver(
            "/lib/node_modules/custom-overload/custom-overload.js",
            files={"/lib/node_modules/custom-overload/package.json": '{"main": "custom-overload.js"}'},
        )
        assert resolver.resolve("custom-overload", "/lib") == (
            "/lib/node_modules/custom-overload/custom-overload.js"
        )

    def test_searches_upward(self):
        resolver = make_resolver("/a/node_modules/pkg/index.js")
        assert resolver.resolve("pkg", "/a/b/c") == "/a/node_modules/pkg/index.js"

    def test_nearest_node_modules_wins(self):
        resolver = make_resolver("/a/node_modules/pkg/index.js", "/a/b/node_modules/pkg/index.js")
        assert resolver.resolve("pkg", "/a/b/c") == "/a/b/node_modules/pkg/index.js"

    def test_package_subpath(self):
        resolver = make_resolver("/node_modules/pkg/lib/util.js")
        assert resolver.resolve("pkg/lib/util", "/src") == "/node_modules/pkg/lib/util.js"

    def test_relative_context(self):
        resolver = make_resolver("node_modules/frogger/index.js")
        assert resolver.resolve("frogger", "subfolder/deepfolder") == "node_modules/frogger/index.js"

    def test_search_stops_at_root(self):
        resolver = make_resolver("/a/b/index.js")

        with pytest.raises(ResolutionFailure) as exc_info:
            resolver.resolve("missing", "/a/b")

        candidates = exc_info.value.candidates
        assert "/a/b/node_modules/missing" in candidates
        assert "/a/node_modules/missing" in candidates
        assert "/node_modules/missing" in candidates


class TestFailures:
    def test_failure_carries_specifier_and_context(self):
        resolver = make_resolver("/lib/index.js")

        with pytest.raises(ResolutionFailure) as exc_info:
            resolver.resolve("./does-not-exist", "/lib")

        assert exc_info.value.specifier == "./does-not-exist"
        assert exc_info.value.context == "/lib"
        assert str(exc_info.value) == "Unable to resolve ./does-not-exist from /lib"

    def test_directory_is_never_a_file(self):
        resolver = make_resolver("/lib/sub/other.js")
        with pytest.raises(ResolutionFailure):
            resolver.resolve("./sub", "/lib")


def test_normalizes_messy_paths():
    resolver = make_resolver("lib/baseFolder/index.js")

    assert resolver.resolve(".////baseFolder/../baseFolder", ".///lib/baseFolder///../baseFolder///..") == (
        "lib/baseFolder/index.js"
    )
    assert resolver.resolve("./lib/baseFolder", ".") == "lib/baseFolder/index.js"


def test_trace_lists_probes_in_order():
    resolver = make_resolver("/d/index.js", extensions=[".ts", ".js"])

    resolved, probed = resolver.resolve_with_trace("./d", "/")

    assert resolved == "/d/index.js"
    assert probed == [
        "/d",
        "/d.ts",
        "/d.js",
        "/d/package.json",
        "/d/index",
        "/d/index.ts",
        "/d/index.js",
    ]
