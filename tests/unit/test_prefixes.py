"""Prefix table tests"""

from unittest import TestCase

from unitformat.prefixes import PrefixSet, ChoiceTable, PrefixError


class PrefixSetTestCase(TestCase):
    """Prefix set tests"""
    def test_defaults(self):
        """Test default prefix set has no prefixes and SI intervals"""
        prefixes = PrefixSet()
        self.assertEqual(prefixes.multiples, ())
        self.assertEqual(prefixes.subdivisions, ())
        self.assertEqual(prefixes.interval, 1000)
        self.assertEqual(prefixes.next_prefix_at, 750)

    def test_sequences_stored_as_tuples(self):
        """Test prefix lists are copied into tuples"""
        multiples = ["k", "M"]
        prefixes = PrefixSet(multiples=multiples)
        multiples.append("G")
        self.assertEqual(prefixes.multiples, ("k", "M"))

    def test_invalid_interval(self):
        """Test intervals not greater than 1 are rejected"""
        for interval in (1, 0.5, 0, -1000, float("inf"), float("nan"), "abc", None):
            with self.subTest(interval=interval):
                self.assertRaises(PrefixError, PrefixSet, interval=interval)

    def test_invalid_next_prefix_at(self):
        """Test non-positive thresholds are rejected"""
        for threshold in (0, -750, float("inf")):
            with self.subTest(threshold=threshold):
                self.assertRaises(PrefixError, PrefixSet, next_prefix_at=threshold)

    def test_invalid_prefixes(self):
        """Test empty, duplicate and non-string prefixes are rejected"""
        self.assertRaises(PrefixError, PrefixSet, multiples=["k", ""])
        self.assertRaises(PrefixError, PrefixSet, multiples=["k", "M", "k"])
        self.assertRaises(PrefixError, PrefixSet, subdivisions=["m", 3])
        self.assertRaises(PrefixError, PrefixSet, multiples="kMG")

    def test_scale_overflow(self):
        """Test intervals whose prefix scales overflow are rejected"""
        self.assertRaises(PrefixError, PrefixSet, multiples=["a", "b", "c"], interval=1e200)
        self.assertRaises(PrefixError, PrefixSet, subdivisions=["a", "b"], interval=1e200)
        # a single prefix at a large interval is fine
        self.assertEqual(PrefixSet(multiples=["a"], interval=1e200).scales(), [(1e200, "a")])

    def test_same_prefix_in_both_lists(self):
        """Test a prefix may be both a multiple and a subdivision"""
        prefixes = PrefixSet(multiples=["x"], subdivisions=["x"])
        self.assertEqual(prefixes.multiples, prefixes.subdivisions)

    def test_prefix_error_is_value_error(self):
        """Test prefix errors can be caught as value errors"""
        self.assertRaises(ValueError, PrefixSet, interval=1)

    def test_replace(self):
        """Test replacing attributes creates a new prefix set"""
        prefixes = PrefixSet(multiples=["k"], interval=1000)
        binary = prefixes.replace(interval=1024, next_prefix_at=768)
        self.assertEqual(binary.interval, 1024)
        self.assertEqual(binary.next_prefix_at, 768)
        self.assertEqual(binary.multiples, ("k",))
        # original unchanged
        self.assertEqual(prefixes.interval, 1000)

    def test_replace_validates(self):
        """Test replaced attributes are validated"""
        prefixes = PrefixSet()
        self.assertRaises(PrefixError, prefixes.replace, interval=1)
        self.assertRaises(TypeError, prefixes.replace, symbol="B")

    def test_equality(self):
        """Test prefix sets with the same attributes are equal"""
        self.assertEqual(PrefixSet(multiples=["k"]), PrefixSet(multiples=("k",)))
        self.assertEqual(hash(PrefixSet(multiples=["k"])), hash(PrefixSet(multiples=("k",))))
        self.assertNotEqual(PrefixSet(multiples=["k"]), PrefixSet(multiples=["K"]))
        self.assertNotEqual(PrefixSet(), PrefixSet(next_prefix_at=768))

    def test_scales(self):
        """Test prefix scales are in ascending order"""
        prefixes = PrefixSet(multiples=["k", "M"], subdivisions=["m", "µ"], interval=1000)
        self.assertEqual(prefixes.scales(), [(1e-6, "µ"), (0.001, "m"), (1000.0, "k"),
                                             (1e6, "M")])

    def test_scales_binary(self):
        """Test prefix scales are powers of the interval"""
        prefixes = PrefixSet(multiples=["Ki", "Mi", "Gi"], interval=1024)
        self.assertEqual([scale for scale, _ in prefixes.scales()], [1024, 1024 ** 2, 1024 ** 3])

    def test_scales_empty(self):
        """Test prefix set without prefixes has no scales"""
        self.assertEqual(PrefixSet().scales(), [])
        self.assertEqual(len(PrefixSet().choices()), 0)

    def test_from_system(self):
        """Test prefix sets created from configured systems"""
        si = PrefixSet.from_system("si")
        self.assertEqual(si.multiples, ("k", "M", "G", "T", "P", "E", "Z", "Y"))
        self.assertEqual(si.subdivisions, ("m", "µ", "n", "p", "f", "a", "z", "y"))
        self.assertEqual(si.interval, 1000)
        self.assertEqual(si.next_prefix_at, 750)

        iec = PrefixSet.from_system("iec")
        self.assertEqual(iec.multiples, ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"))
        self.assertEqual(iec.interval, 1024)
        self.assertEqual(iec.next_prefix_at, 768)

        binary = PrefixSet.from_system("binary")
        self.assertEqual(binary.multiples, ("K", "M", "G", "T", "P", "E", "Z", "Y"))
        self.assertEqual(binary.interval, 1024)

    def test_from_unknown_system(self):
        """Test unknown prefix systems are rejected"""
        self.assertRaises(ValueError, PrefixSet.from_system, "imperial")


class ChoiceTableTestCase(TestCase):
    """Choice table tests"""
    def setUp(self):
        self.choices = PrefixSet(multiples=["k", "M"], subdivisions=["m"]).choices()

    def test_limits_and_labels(self):
        """Test choice table built from prefix set"""
        self.assertEqual(self.choices.limits, (0.001, 1000.0, 1e6))
        self.assertEqual(self.choices.labels, ("m", "k", "M"))

    def test_parse(self):
        """Test limit of label found in text"""
        self.assertEqual(self.choices.parse("kB"), (1000.0, 1))
        self.assertEqual(self.choices.parse("5 MB", 2), (1e6, 3))
        self.assertIsNone(self.choices.parse("GB"))
        self.assertIsNone(self.choices.parse("k", 1))

    def test_parse_longest_label(self):
        """Test longest matching label wins"""
        choices = ChoiceTable([1, 2, 3], ["d", "da", "x"])
        self.assertEqual(choices.parse("dam"), (2, 2))
        self.assertEqual(choices.parse("dm"), (1, 1))

    def test_parse_equal_length_labels(self):
        """Test first label wins between equally long matches"""
        choices = ChoiceTable([1, 2], ["m", "m"])
        self.assertEqual(choices.parse("m"), (1, 1))

    def test_invalid_tables(self):
        """Test mismatched and unordered tables are rejected"""
        self.assertRaises(ValueError, ChoiceTable, [1, 2], ["a"])
        self.assertRaises(ValueError, ChoiceTable, [2, 1], ["a", "b"])
        self.assertRaises(ValueError, ChoiceTable, [1, 1], ["a", "b"])
