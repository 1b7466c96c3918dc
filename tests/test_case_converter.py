#!/usr/bin/env python3
"""Case conversion of flag keys."""
from __future__ import annotations

import unittest

import alias_fixtures  # noqa: F401

from flagalias.core.models import AliasType, CASE_TYPES
from flagalias.naming.case_converter import (
    convert,
    split_words,
    to_camel,
    to_delimited,
    to_dot,
    to_kebab,
    to_lower_camel,
    to_screaming_snake,
    to_snake,
)

SAMPLE_KEYS = [
    "my-flag-key",
    "my_flag_key",
    "myFlagKey",
    "MyFlagKey",
    "MY_FLAG_KEY",
    "my.flag.key",
    "HTTPServer-enabled",
    "release-2024-q1",
    "userID",
    "flag",
    "  spaced out  flag ",
]


class SplitWordsTests(unittest.TestCase):
    def test_punctuation_separates_words(self) -> None:
        self.assertEqual(split_words("my-flag_key.v"), ["my", "flag", "key", "v"])

    def test_case_change_separates_words(self) -> None:
        self.assertEqual(split_words("myFlagKey"), ["my", "Flag", "Key"])

    def test_acronym_ends_before_capitalized_word(self) -> None:
        self.assertEqual(split_words("JSONData"), ["JSON", "Data"])
        self.assertEqual(split_words("userID"), ["user", "ID"])

    def test_digits_form_their_own_word(self) -> None:
        self.assertEqual(split_words("flag2go"), ["flag", "2", "go"])

    def test_no_boundary_is_a_single_word(self) -> None:
        self.assertEqual(split_words("flag"), ["flag"])

    def test_degenerate_input(self) -> None:
        self.assertEqual(split_words(""), [])
        self.assertEqual(split_words("--__.."), [])


class ConverterTests(unittest.TestCase):
    def test_kebab(self) -> None:
        self.assertEqual(to_kebab("my_flag_key"), "my-flag-key")

    def test_screaming_snake(self) -> None:
        self.assertEqual(to_screaming_snake("myFlagKey"), "MY_FLAG_KEY")

    def test_lower_camel(self) -> None:
        self.assertEqual(to_lower_camel("my-flag-key"), "myFlagKey")
        self.assertEqual(to_lower_camel("HTTPServer"), "httpServer")
        self.assertEqual(to_lower_camel("MY_FLAG_KEY"), "myFlagKey")

    def test_upper_camel(self) -> None:
        self.assertEqual(to_camel("my-flag-key"), "MyFlagKey")
        self.assertEqual(to_camel("flag-v2"), "FlagV2")

    def test_acronyms_are_lower_cased_after_the_first_letter(self) -> None:
        self.assertEqual(to_camel("userID"), "UserId")
        self.assertEqual(to_lower_camel("userID"), "userId")
        self.assertEqual(to_camel("MY_FLAG_KEY"), "MyFlagKey")

    def test_snake(self) -> None:
        self.assertEqual(to_snake("MyFlagKey"), "my_flag_key")
        self.assertEqual(to_snake("JSONData"), "json_data")

    def test_dot(self) -> None:
        self.assertEqual(to_dot("my-flag-key"), "my.flag.key")
        self.assertEqual(to_delimited("myFlagKey", "/"), "my/flag/key")

    def test_malformed_input_still_yields_a_string(self) -> None:
        self.assertEqual(to_camel(""), "")
        self.assertEqual(to_lower_camel("---"), "")
        self.assertEqual(to_snake("flag"), "flag")

    def test_idempotent_on_converted_input(self) -> None:
        for conv in CASE_TYPES:
            for key in SAMPLE_KEYS:
                once = convert(key, conv)
                with self.subTest(convention=conv.value, key=key):
                    self.assertEqual(convert(once, conv), once)

    def test_convert_dispatches_by_convention(self) -> None:
        self.assertEqual(convert("my-flag", AliasType.CAMEL_CASE), "myFlag")
        self.assertEqual(convert("my-flag", AliasType.PASCAL_CASE), "MyFlag")
        self.assertEqual(convert("my-flag", AliasType.SNAKE_CASE), "my_flag")
        self.assertEqual(convert("my-flag", AliasType.UPPER_SNAKE_CASE), "MY_FLAG")
        self.assertEqual(convert("my_flag", AliasType.KEBAB_CASE), "my-flag")
        self.assertEqual(convert("my-flag", AliasType.DOT_CASE), "my.flag")

    def test_convert_rejects_non_case_types(self) -> None:
        with self.assertRaises(ValueError):
            convert("my-flag", AliasType.LITERAL)


if __name__ == "__main__":
    unittest.main()
