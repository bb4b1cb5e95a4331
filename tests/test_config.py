import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from ShoLang.Config import DEFAULT_OPTIONS, Options


class OptionsTestCase(unittest.TestCase):

    def setUp(self):
        # start every test from an environment without SHO_* settings
        patcher = patch.dict(os.environ, {k: v for k, v in os.environ.items() if not k.startswith("SHO_")},
                             clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_defaults(self):
        options = Options()
        self.assertEqual("own", options.method_resolution)
        self.assertEqual("strict", options.assignment)
        self.assertEqual(10000, options.recursion_limit)
        self.assertFalse(options.walk_superclasses)
        self.assertTrue(options.strict_assignment)

    def test_default_options_match_field_defaults(self):
        self.assertEqual(Options().model_dump(), DEFAULT_OPTIONS.model_dump())

    def test_flags(self):
        options = Options(method_resolution="chain", assignment="lenient")
        self.assertTrue(options.walk_superclasses)
        self.assertFalse(options.strict_assignment)

    def test_invalid_values(self):
        with self.assertRaises(ValidationError):
            Options(method_resolution="mro")
        with self.assertRaises(ValidationError):
            Options(assignment="loose")
        with self.assertRaises(ValidationError):
            Options(recursion_limit=10)

    def test_validation_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Options(assignment="loose")

    def test_model_copy_applies_overrides(self):
        options = Options().model_copy(update={"assignment": "lenient"})
        self.assertFalse(options.strict_assignment)
        self.assertEqual("own", options.method_resolution)

    def test_from_environment(self):
        environ = {
            "SHO_METHOD_RESOLUTION": " Chain ",
            "SHO_ASSIGNMENT": "LENIENT",
            "SHO_RECURSION_LIMIT": "5000",
        }
        with patch.dict(os.environ, environ):
            options = Options()
        self.assertEqual("chain", options.method_resolution)
        self.assertEqual("lenient", options.assignment)
        self.assertEqual(5000, options.recursion_limit)

    def test_keyword_arguments_beat_environment(self):
        with patch.dict(os.environ, {"SHO_ASSIGNMENT": "lenient"}):
            self.assertEqual("strict", Options(assignment="strict").assignment)

    def test_bad_limit_in_environment(self):
        with patch.dict(os.environ, {"SHO_RECURSION_LIMIT": "lots"}):
            with self.assertRaises(ValidationError):
                Options()

    def test_bad_mode_in_environment(self):
        with patch.dict(os.environ, {"SHO_METHOD_RESOLUTION": "deep"}):
            with self.assertRaises(ValidationError):
                Options()


if __name__ == '__main__':
    unittest.main()
