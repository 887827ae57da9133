"""Command line interface tests"""

from unittest import TestCase
from click.testing import CliRunner

from unitformat.__main__ import cli


class CliTestCase(TestCase):
    """Base class for command line tests"""
    def setUp(self):
        self.runner = CliRunner()

    def invoke(self, *args):
        return self.runner.invoke(cli, args)


class FormatCommandTestCase(CliTestCase):
    """Format command tests"""
    def test_bytes(self):
        """Test formatting bytes"""
        result = self.invoke("format", "1024", "26112", "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "1 KiB\n25.5 KiB\n")

    def test_si(self):
        """Test formatting SI units"""
        result = self.invoke("format", "25500", "0.001", "--kind", "si", "--symbol", "m",
                             "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "25.5 km\n1 mm\n")

    def test_negative(self):
        """Test negative values are not taken for options"""
        result = self.invoke("format", "-26112", "-768", "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "-25.5 KiB\n-768 B\n")

    def test_si_without_symbol(self):
        """Test SI kind requires a symbol"""
        result = self.invoke("format", "1", "--kind", "si", "--locale", "en")
        self.assertEqual(result.exit_code, 2)

    def test_options(self):
        """Test formatter options"""
        result = self.invoke("format", "1536", "--locale", "en", "--next-prefix-at", "10000",
                             "--no-grouping")
        self.assertEqual(result.stdout, "1536 B\n")
        result = self.invoke("format", "1285", "--locale", "en", "--max-fraction", "2")
        self.assertEqual(result.stdout, "1.25 KiB\n")
        result = self.invoke("format", "1024", "--locale", "en", "--min-fraction", "1")
        self.assertEqual(result.stdout, "1.0 KiB\n")

    def test_template(self):
        """Test custom template"""
        result = self.invoke("format", "26112", "--locale", "en", "--template", "{1}{2}: {0}")
        self.assertEqual(result.stdout, "KiB: 25.5\n")

    def test_invalid_template(self):
        """Test invalid template is a usage error"""
        result = self.invoke("format", "1", "--locale", "en", "--template", "{0}")
        self.assertEqual(result.exit_code, 2)

    def test_invalid_locale(self):
        """Test unknown locale is a usage error"""
        result = self.invoke("format", "1", "--locale", "xx_YY")
        self.assertEqual(result.exit_code, 2)

    def test_invalid_threshold(self):
        """Test non-positive threshold is rejected"""
        result = self.invoke("format", "1", "--locale", "en", "--next-prefix-at", "0")
        self.assertEqual(result.exit_code, 2)


class ParseCommandTestCase(CliTestCase):
    """Parse command tests"""
    def test_bytes(self):
        """Test parsing bytes"""
        result = self.invoke("parse", "25.5 KiB", "0.8 KiB", "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "26112\n819.2\n")

    def test_french(self):
        """Test parsing French bytes"""
        result = self.invoke("parse", "25,5 Kio", "--locale", "fr")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "26112\n")

    def test_negative(self):
        """Test negative texts after the option terminator"""
        result = self.invoke("parse", "--locale", "en", "--", "-1 KiB")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "-1024\n")

    def test_trailing_text(self):
        """Test trailing text is ignored"""
        result = self.invoke("parse", "1 KiB free", "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout, "1024\n")

    def test_failure(self):
        """Test unparseable text sets the exit code"""
        result = self.invoke("parse", "5 XB", "1 KiB", "--locale", "en")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("cannot parse '5 XB' (position 2)", result.output)
        self.assertIn("1024", result.output)


class PrefixesCommandTestCase(CliTestCase):
    """Prefixes command tests"""
    def test_bytes(self):
        """Test listing IEC prefixes"""
        result = self.invoke("prefixes", "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("interval 1024, next prefix above 768", result.stdout)
        self.assertIn("Ki", result.stdout)
        self.assertIn("1024", result.stdout)

    def test_si(self):
        """Test listing SI prefixes"""
        result = self.invoke("prefixes", "--kind", "si", "--locale", "en")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("interval 1000, next prefix above 750", result.stdout)
        self.assertIn("1e+06", result.stdout)
        self.assertIn("µ", result.stdout)


class MiscCommandTestCase(CliTestCase):
    """Version and config command tests"""
    def test_version(self):
        """Test version option"""
        result = self.invoke("--version")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("unitformat", result.stdout)

    def test_config_path(self):
        """Test config path command"""
        result = self.invoke("config", "path")
        self.assertEqual(result.exit_code, 0)
        self.assertTrue(result.stdout.strip().endswith("unitformat.yaml"))

    def test_config_show(self):
        """Test config show command"""
        result = self.invoke("config", "show")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("'systems'", result.stdout)
