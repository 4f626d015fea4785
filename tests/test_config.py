import os
import tempfile
import unittest

from textstream.config import (
    Config,
    ConfigError,
    Enum,
    Option,
    READER_OPTIONS,
    default_config,
    read_file
)


class TestOption(unittest.TestCase):

    def test_mutability(self):
        opt = Option(int)

        with self.assertRaises(AttributeError):
            opt.type = float

        with self.assertRaises(AttributeError):
            opt.default = 42


class TestConfig(unittest.TestCase):

    def test_int_option(self):
        cfg = Config({"int": Option(int)})

        cfg.override({"int": 42})
        cfg.validate()

        self.assertEqual(cfg["int"], 42)
        self.assertEqual(cfg.int, 42)

    def test_parse_int_option(self):
        cfg = Config({"int": Option(int)})

        cfg.parse(["int=42"])
        cfg.validate()

        self.assertEqual(cfg.int, 42)

    def test_parse_bool_option(self):
        cfg = Config({"bool": Option(bool)})

        cfg.parse(["bool=True"])
        self.assertEqual(cfg.bool, True)

        cfg.clear()
        cfg.parse(["bool=off"])
        self.assertEqual(cfg.bool, False)

        cfg.clear()
        with self.assertRaises(ConfigError):
            cfg.parse(["bool=hello"])

    def test_parse_malformed(self):
        cfg = Config({"int": Option(int)})

        for s in ("int", "=1", "int=abc"):
            with self.subTest(s=s):
                with self.assertRaises(ConfigError):
                    cfg.parse([s])
        self.assertEqual(cfg.layers, 0)

    def test_option_default(self):
        cfg = Config({"bool": Option(bool, default=True)})

        self.assertEqual(cfg.bool, True)

        cfg.override({"bool": False})
        self.assertEqual(cfg.bool, False)

    def test_wrong_type(self):
        cfg = Config({"int": Option(int)})

        with self.assertRaises(ConfigError):
            cfg.override({"int": "42"})
        with self.assertRaises(ConfigError):
            cfg.override({"int": True})

    def test_check(self):
        cfg = Config({"size": Option(int, check=lambda v: v > 0)})

        with self.assertRaises(ConfigError):
            cfg.override({"size": 0})

    def test_required_option(self):
        cfg = Config({"required": Option(int, required=True)})

        cfg.override({})

        with self.assertRaises(ConfigError):
            cfg.validate()

    def test_strict_config(self):
        cfg = Config({"a": Option(int)})

        with self.assertRaises(ConfigError):
            cfg.override({"a": 42, "c": "Hello"})

    def test_non_strict_config(self):
        cfg = Config({"a": Option(int)}, strict=False)

        cfg.override({"a": 42, "c": "Hello"})

        self.assertEqual(cfg.c, "Hello")

    def test_enum(self):
        cfg = Config({"enum": Option(Enum("str", 1, True))})

        cfg.override({"enum": "str"})
        self.assertEqual(cfg.enum, "str")

        cfg.override({"enum": 1})
        self.assertEqual(cfg.enum, 1)

        with self.assertRaises(ConfigError):
            cfg.override({"enum": 42})

    def test_layers(self):
        cfg = Config({"int": Option(int, default=0)})

        cfg.override({"int": 1})
        cfg.override({"int": 2})
        self.assertEqual(cfg.layers, 2)
        self.assertEqual(cfg.int, 2)

        self.assertEqual(cfg.pop_layer(), {"int": 2})
        self.assertEqual(cfg.int, 1)

        cfg.clear()
        self.assertEqual(cfg.layers, 0)
        self.assertIsNone(cfg.pop_layer())
        self.assertEqual(cfg.int, 0)

    def test_copy(self):
        cfg = Config({"int": Option(int, default=0)})
        cfg.override({"int": 1})

        copy = cfg.copy()
        copy.override({"int": 2})

        self.assertEqual(cfg.int, 1)
        self.assertEqual(copy.int, 2)

    def test_missing_name(self):
        cfg = Config({"int": Option(int)})

        with self.assertRaises(AttributeError):
            cfg.missing
        with self.assertRaises(KeyError):
            cfg["missing"]


class TestReaderOptions(unittest.TestCase):

    def test_defaults(self):
        cfg = default_config()

        self.assertEqual(dict(cfg.items()), {
            "bufsize": 4096,
            "max_token_size": 65536,
            "errors": "strict",
        })

    def test_parse(self):
        cfg = default_config()

        cfg.parse(["bufsize=16", "errors=replace"])

        self.assertEqual(cfg.bufsize, 16)
        self.assertEqual(cfg.errors, "replace")

    def test_invalid_values(self):
        cfg = default_config()

        for s in ("bufsize=0", "max_token_size=-1", "errors=loud"):
            with self.subTest(s=s):
                with self.assertRaises(ConfigError):
                    cfg.parse([s])

    def test_read_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "reader.py")
            with open(path, "w", encoding="UTF-8") as fout:
                fout.write("bufsize = 2 ** 10\nerrors = 'ignore'\n")

            cfg = read_file(path)

        self.assertEqual(cfg.bufsize, 1024)
        self.assertEqual(cfg.errors, "ignore")
        self.assertEqual(cfg.max_token_size,
                         READER_OPTIONS["max_token_size"].default)

    def test_read_broken_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "reader.py")
            with open(path, "w", encoding="UTF-8") as fout:
                fout.write("bufsize = \n")

            with self.assertRaises(ConfigError):
                read_file(path)

    def test_read_missing_file(self):
        with self.assertRaises(ConfigError):
            read_file("/nonexistent/reader.py")
