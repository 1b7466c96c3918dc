#!/usr/bin/env python3
"""End-to-end alias resolution."""
from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import alias_fixtures as fx

import flagalias
from flagalias import (
    AliasResolver,
    AliasType,
    CaseRule,
    CommandRule,
    FilePatternRule,
    LiteralRule,
    ResolverConfig,
    generate_aliases,
    rules_from_config,
)
from flagalias.core.errors import (
    CommandSpawnError,
    CommandTimeoutError,
    MissingFileError,
    PatternCompileError,
)


class _GhostGlobber:
    def expand(self, base_dir, pattern):
        return [str(Path(base_dir) / "vanished.py")]


class ResolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.base = str(self.root)
        fx.write(self.root, "src/consts.py", 'MY_FLAG = "my-flag"\nOTHER = "other"\n')
        fx.write(self.root, "src/more.py", 'LEGACY_FLAG = "my-flag"\n')

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_rules_apply_in_order_and_dedupe_per_flag(self) -> None:
        rules = [
            CaseRule(AliasType.CAMEL_CASE),
            CaseRule(AliasType.SNAKE_CASE),
            LiteralRule(flags={"my-flag": ["MY_FLAG", "myFlag"]}),
            FilePatternRule(paths=("src/*.py",), patterns=(r'(\w+) = "FLAG_KEY"',)),
        ]
        got = generate_aliases(["my-flag", "other"], rules, self.base)
        self.assertEqual(got, {
            "my-flag": ["myFlag", "my_flag", "MY_FLAG", "LEGACY_FLAG"],
            "other": ["other", "OTHER"],
        })

    def test_top_level_files_are_scanned_before_subdirectories(self) -> None:
        fx.write(self.root, "b.txt", "X = my-flag\n")
        fx.write(self.root, "a/c.txt", "Y = my-flag\n")
        rules = [FilePatternRule(paths=("**/*.txt",), patterns=(r"(\w) = FLAG_KEY",))]
        self.assertEqual(generate_aliases(["my-flag"], rules, self.base), {"my-flag": ["X", "Y"]})

    def test_literal_output_preserves_configured_order(self) -> None:
        rules = [LiteralRule(flags={"f": ["z", "a", "m"]})]
        self.assertEqual(generate_aliases(["f", "g"], rules, self.base), {"f": ["z", "a", "m"], "g": []})

    def test_every_flag_gets_an_entry(self) -> None:
        self.assertEqual(generate_aliases(["a", "b"], [], self.base), {"a": [], "b": []})
        self.assertEqual(generate_aliases([], [CaseRule(AliasType.KEBAB_CASE)], self.base), {})

    def test_aliases_are_unique(self) -> None:
        rules = [
            CaseRule(AliasType.SNAKE_CASE),
            CaseRule(AliasType.SNAKE_CASE),
            LiteralRule(flags={"my_flag": ["my_flag", "x", "x"]}),
        ]
        got = generate_aliases(["my_flag"], rules, self.base)
        self.assertEqual(got["my_flag"], ["my_flag", "x"])

    def test_file_pattern_with_no_matches_contributes_nothing(self) -> None:
        rules = [FilePatternRule(paths=("docs/**/*.md",), patterns=(r"(\w+)FLAG_KEY",))]
        self.assertEqual(generate_aliases(["my-flag"], rules, self.base), {"my-flag": []})

    def test_command_aliases(self) -> None:
        rules = [
            CaseRule(AliasType.UPPER_SNAKE_CASE),
            CommandRule(fx.script_command(self.root, "aliases.py", fx.ECHO_ALIASES)),
        ]
        got = generate_aliases(["my-flag"], rules, self.base)
        self.assertEqual(got, {"my-flag": ["MY_FLAG", "MY-FLAG", "my-flag-alias"]})

    def test_command_failure_aborts_the_call(self) -> None:
        rules = [CaseRule(AliasType.CAMEL_CASE), CommandRule(str(self.root / "missing-helper"))]
        with self.assertRaises(CommandSpawnError):
            generate_aliases(["a", "b"], rules, self.base)

    def test_command_timeout_aborts_the_call(self) -> None:
        rules = [CommandRule(fx.script_command(self.root, "slow.py", fx.SLEEPER), timeout=1)]
        with self.assertRaises(CommandTimeoutError):
            generate_aliases(["a"], rules, self.base)

    def test_cache_build_errors_surface_before_any_rule(self) -> None:
        rules = [
            CommandRule(str(self.root / "never-run")),
            FilePatternRule(paths=("*.py",), patterns=("(FLAG_KEY)",), name="ghosts"),
        ]
        with self.assertRaises(MissingFileError) as ctx:
            AliasResolver(globber=_GhostGlobber()).resolve(["a"], rules, self.base)
        self.assertEqual(ctx.exception.rule, "ghosts")

    def test_bad_template_aborts_the_call(self) -> None:
        rules = [FilePatternRule(paths=("src/*.py",), patterns=("[FLAG_KEY",))]
        with self.assertRaises(PatternCompileError):
            generate_aliases(["my-flag"], rules, self.base)

    def test_rules_from_config_round_into_resolver(self) -> None:
        rules = rules_from_config([
            {"type": "kebab-case"},
            {"type": "filepattern", "paths": ["src/consts.py"], "patterns": [r'(\w+) = "FLAG_KEY"']},
        ])
        self.assertEqual(generate_aliases(["OTHER"], rules, self.base), {"OTHER": ["other"]})

    def test_configured_placeholder(self) -> None:
        rules = [FilePatternRule(paths=("src/*.py",), patterns=(r'(\w+) = "%KEY%"',))]
        resolver = AliasResolver(ResolverConfig(placeholder="%KEY%"))
        self.assertEqual(resolver.resolve(["other"], rules, self.base), {"other": ["OTHER"]})

    def test_report_tracks_the_last_call(self) -> None:
        rules = [
            CaseRule(AliasType.DOT_CASE),
            FilePatternRule(paths=("src/*.py", "src/consts.py"), patterns=(r'(\w+) = "FLAG_KEY"',)),
            CommandRule(fx.script_command(self.root, "ab.py", fx.FIXED_AB)),
        ]
        resolver = AliasResolver()
        resolver.resolve(["my-flag", "other"], rules, self.base)
        report = resolver.report
        self.assertEqual(report.flags, 2)
        self.assertEqual(report.rules, 3)
        self.assertEqual(report.files_cached, 2)
        self.assertEqual(report.commands_run, 2)
        self.assertEqual(report.aliases_by_type["command"], 4)
        self.assertEqual(report.aliases_total, 9)
        self.assertIsNotNone(report.duration_s)
        self.assertEqual(json.loads(report.to_json())["commands_run"], 2)

    def test_case_rules_share_one_report_stage(self) -> None:
        rules = [CaseRule(t) for t in AliasType if t.is_case]
        resolver = AliasResolver()
        resolver.resolve(["my-flag"], rules, self.base)
        self.assertEqual(
            set(resolver.report.time_by_stage),
            {"cache_build", "literal", "case", "file_pattern", "command"},
        )
        self.assertEqual(sum(resolver.report.aliases_by_type.values()), 6)

    def test_package_version(self) -> None:
        self.assertTrue(flagalias.__version__)


if __name__ == "__main__":
    unittest.main()
