#!/usr/bin/env python3
"""
Smoke tests to catch basic import and startup failures.

They run quickly and should be part of every test run.
"""

import importlib
import pkgutil
import subprocess
import sys

import pytest

import partialsum


class TestModuleImports:
    """Test that all modules can be imported without errors."""

    def test_all_modules_import(self):
        failed_imports = []

        for _, module_name, _ in pkgutil.walk_packages(
            partialsum.__path__, prefix="partialsum."
        ):
            try:
                importlib.import_module(module_name)
            except Exception as e:
                failed_imports.append((module_name, str(e)))

        if failed_imports:
            error_msg = "Failed to import modules:\n"
            for module, error in failed_imports:
                error_msg += f"  - {module}: {error}\n"
            pytest.fail(error_msg)


class TestCLICommands:
    """Test that the CLI at least shows help without crashing."""

    @pytest.mark.parametrize("flag", ["--help", "--version"])
    def test_cli_help_commands(self, flag):
        result = subprocess.run(
            [sys.executable, "-m", "partialsum", flag],
            capture_output=True,
            text=True,
            timeout=30,
        )

        assert result.returncode == 0, result.stderr
        assert "partialsum" in result.stdout

    def test_help_lists_examples(self):
        result = subprocess.run(
            [sys.executable, "-m", "partialsum", "--help"],
            capture_output=True,
            text=True,
            timeout=30,
        )

        assert "--check" in result.stdout
        assert "--remap" in result.stdout
        assert "EXAMPLES:" in result.stdout
