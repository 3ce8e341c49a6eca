import io
import os
import shutil
import tempfile
import unittest

import toml

from pkgprobe import config
from pkgprobe.config import Config, StaticPolicy, envify
from pkgprobe.metadata import MetadataSink

HOST = "x86_64-unknown-linux-gnu"


def make_config(environ=None, **kwargs):
    stream = io.StringIO()
    cfg = Config(environ=environ or {}, sink=MetadataSink(stream=stream), **kwargs)
    return cfg, stream


class TestStaticPolicy(unittest.TestCase):

    def test_from_bool(self):
        self.assertIs(StaticPolicy.from_bool(True), StaticPolicy.PREFER_STATIC)
        self.assertIs(StaticPolicy.from_bool(False), StaticPolicy.DYNAMIC)

    def test_parse(self):
        self.assertIs(StaticPolicy.parse("static"), StaticPolicy.PREFER_STATIC)
        self.assertIs(StaticPolicy.parse("force_static"), StaticPolicy.FORCE_STATIC)
        self.assertIs(StaticPolicy.parse("Dynamic"), StaticPolicy.DYNAMIC)
        self.assertIs(StaticPolicy.parse(True), StaticPolicy.PREFER_STATIC)
        with self.assertRaises(ValueError):
            StaticPolicy.parse("sometimes")


class TestConfigBuilder(unittest.TestCase):

    def test_defaults(self):
        cfg = Config()
        self.assertIsNone(cfg.static_policy)
        self.assertEqual(cfg.static_blacklist, frozenset())
        self.assertIsNone(cfg.min_version)
        self.assertEqual(cfg.extra_args, ())
        self.assertTrue(cfg.emit_metadata)
        self.assertFalse(cfg.emit_env_metadata)
        self.assertTrue(cfg.allow_system_libs)

    def test_builder_returns_new_config(self):
        base = Config()
        derived = base.atleast_version("1.2.3").arg("--define-prefix").statik(StaticPolicy.FORCE_STATIC)
        self.assertIsNone(base.min_version)
        self.assertEqual(base.extra_args, ())
        self.assertEqual(derived.min_version, "1.2.3")
        self.assertEqual(derived.extra_args, ("--define-prefix",))
        self.assertIs(derived.static_policy, StaticPolicy.FORCE_STATIC)

    def test_args_keep_order(self):
        cfg = Config().arg("--a").arg("--b")
        self.assertEqual(cfg.extra_args, ("--a", "--b"))

    def test_statik_rejects_bool(self):
        with self.assertRaises(TypeError):
            Config().statik(True)

    def test_blacklist(self):
        cfg = Config().blacklist("foo").blacklist("bar", "foo")
        self.assertTrue(cfg.blacklist_contains("foo"))
        self.assertTrue(cfg.blacklist_contains("bar"))
        self.assertFalse(cfg.blacklist_contains("baz"))

    def test_toggles(self):
        cfg = Config().metadata(False).env_metadata(True).print_system_libs(False)
        self.assertFalse(cfg.emit_metadata)
        self.assertTrue(cfg.emit_env_metadata)
        self.assertFalse(cfg.allow_system_libs)

    def test_envify(self):
        self.assertEqual(envify("gtk+-3.0"), "GTK+_3.0")
        self.assertEqual(envify("libfoo"), "LIBFOO")


class TestEnvironment(unittest.TestCase):

    def test_env_var_without_metadata(self):
        cfg, stream = make_config({"FOO": "1"})
        self.assertEqual(cfg.env_var("FOO"), "1")
        self.assertIsNone(cfg.env_var("BAR"))
        self.assertEqual(stream.getvalue(), "")

    def test_env_var_emits_rerun_metadata(self):
        cfg, stream = make_config({"FOO": "1"})
        cfg = cfg.env_metadata(True)
        cfg.env_var("FOO")
        cfg.env_var("BAR")
        self.assertEqual(stream.getvalue().splitlines(), [
            "cargo:rerun-if-env-changed=FOO",
            "cargo:rerun-if-env-changed=BAR",
        ])

    def test_target_lookups_do_not_emit_rerun_metadata(self):
        cfg, stream = make_config({
            "HOST": HOST, "TARGET": "aarch64-linux-android", "PKG_CONFIG_ALLOW_CROSS": "1",
            "TARGET_PKG_CONFIG_PATH": "/cross",
        })
        cfg = cfg.env_metadata(True)
        self.assertTrue(cfg.target_supported())
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/cross")
        self.assertEqual(stream.getvalue().splitlines(), [
            "cargo:rerun-if-env-changed=PKG_CONFIG_PATH_aarch64-linux-android",
            "cargo:rerun-if-env-changed=PKG_CONFIG_PATH_aarch64_linux_android",
            "cargo:rerun-if-env-changed=TARGET_PKG_CONFIG_PATH",
        ])

    def test_targeted_without_target(self):
        cfg, _ = make_config({"PKG_CONFIG_PATH": "/plain"})
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/plain")

    def test_targeted_native_build_uses_plain_variable(self):
        cfg, _ = make_config({"HOST": HOST, "TARGET": HOST, "PKG_CONFIG_PATH": "/plain"})
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/plain")

    def test_targeted_native_build_prefers_host_variable(self):
        cfg, _ = make_config({
            "HOST": HOST, "TARGET": HOST,
            "PKG_CONFIG_PATH": "/plain",
            "HOST_PKG_CONFIG_PATH": "/host",
            "TARGET_PKG_CONFIG_PATH": "/target",
        })
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/host")

    def test_targeted_cross_build_prefers_triple_suffix(self):
        target = "aarch64-unknown-linux-gnu"
        cfg, _ = make_config({
            "HOST": HOST, "TARGET": target,
            "PKG_CONFIG_PATH": "/plain",
            "TARGET_PKG_CONFIG_PATH": "/target",
            f"PKG_CONFIG_PATH_{target}": "/triple",
            "PKG_CONFIG_PATH_aarch64_unknown_linux_gnu": "/underscored",
        })
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/triple")

    def test_targeted_cross_build_underscored_suffix(self):
        cfg, _ = make_config({
            "HOST": HOST, "TARGET": "aarch64-unknown-linux-gnu",
            "PKG_CONFIG_PATH": "/plain",
            "TARGET_PKG_CONFIG_PATH": "/target",
            "PKG_CONFIG_PATH_aarch64_unknown_linux_gnu": "/underscored",
        })
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/underscored")

    def test_targeted_cross_build_uses_target_kind(self):
        cfg, _ = make_config({
            "HOST": HOST, "TARGET": "aarch64-unknown-linux-gnu",
            "PKG_CONFIG_PATH": "/plain",
            "HOST_PKG_CONFIG_PATH": "/host",
            "TARGET_PKG_CONFIG_PATH": "/target",
        })
        self.assertEqual(cfg.targeted_env_var("PKG_CONFIG_PATH"), "/target")

    def test_targeted_with_target_but_no_host(self):
        cfg, _ = make_config({"TARGET": HOST, "PKG_CONFIG_PATH": "/plain"})
        self.assertIsNone(cfg.targeted_env_var("PKG_CONFIG_PATH"))

    def test_target_supported(self):
        self.assertTrue(make_config({})[0].target_supported())
        self.assertTrue(make_config({"HOST": HOST, "TARGET": HOST})[0].target_supported())
        self.assertFalse(make_config({"HOST": HOST, "TARGET": "arm-linux-androideabi"})[0].target_supported())
        self.assertTrue(make_config({
            "HOST": HOST, "TARGET": "arm-linux-androideabi", "PKG_CONFIG_ALLOW_CROSS": "1",
        })[0].target_supported())

    def test_is_msvc_target(self):
        self.assertTrue(make_config({"TARGET": "x86_64-pc-windows-msvc"})[0].is_msvc_target())
        self.assertFalse(make_config({"TARGET": HOST})[0].is_msvc_target())

    def test_print_metadata_toggle(self):
        cfg, stream = make_config()
        cfg.print_metadata("rustc-link-lib=z")
        cfg.metadata(False).print_metadata("rustc-link-lib=m")
        self.assertEqual(stream.getvalue(), "cargo:rustc-link-lib=z\n")


class TestOptionFile(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, config.CONFIG_FILE)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_load_config_not_found(self):
        """Test that loading a non-existent config returns an empty dict."""
        self.assertEqual(config.load_config(path=self.test_dir), {})

    def test_load_config_invalid(self):
        with open(self.config_path, "w") as f:
            f.write("[probe\nstatic = ")
        self.assertEqual(config.load_config(path=self.test_dir), {})

    def test_from_options(self):
        options = {
            "probe": {
                "static": "force-static",
                "static_blacklist": ["ssl"],
                "atleast_version": "1.2",
                "args": ["--define-prefix"],
                "metadata": False,
                "env_metadata": True,
                "print_system_libs": False,
            }
        }
        with open(self.config_path, "w") as f:
            toml.dump(options, f)

        cfg = Config.from_options(config.load_config(path=self.test_dir))
        self.assertIs(cfg.static_policy, StaticPolicy.FORCE_STATIC)
        self.assertTrue(cfg.blacklist_contains("ssl"))
        self.assertEqual(cfg.min_version, "1.2")
        self.assertEqual(cfg.extra_args, ("--define-prefix",))
        self.assertFalse(cfg.emit_metadata)
        self.assertTrue(cfg.emit_env_metadata)
        self.assertFalse(cfg.allow_system_libs)

    def test_from_options_accepts_single_strings(self):
        with open(self.config_path, "w") as f:
            f.write('[probe]\nstatic_blacklist = "foo"\nargs = "--define-prefix"\n')

        cfg = Config.from_options(config.load_config(path=self.test_dir))
        self.assertEqual(cfg.static_blacklist, frozenset({"foo"}))
        self.assertEqual(cfg.extra_args, ("--define-prefix",))

    def test_from_empty_options(self):
        self.assertEqual(Config.from_options({}), Config())


if __name__ == "__main__":
    unittest.main()
