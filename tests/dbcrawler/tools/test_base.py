"""Tests for the executable and command provider base classes."""

from io import StringIO

import pytest
from rich.console import Console

from dbcrawler.crawl.options import CrawlerOptions, OutputOptions
from dbcrawler.inclusion.rules import ExcludeAll
from dbcrawler.tools.base import (
    CommandProvider,
    DeprecatedAccessError,
    Executable,
    ExecutionError,
    SingleCommandProvider,
    help_resource_path,
    read_help,
)
from dbcrawler.tools.listing import ListCommandProvider, ListExecutable
from dbcrawler.tools.template import TemplateCommandProvider


class EchoExecutable(Executable):
    def execute(self, catalog, console=None):
        self.write_output(f"catalog {catalog.name}", console)


class EchoCommandProvider(SingleCommandProvider):
    COMMAND = "echo"
    EXECUTABLE_CLASS = EchoExecutable
    HELP_RESOURCE = "help/missing.txt"


class MultiCommandProvider(CommandProvider):
    def supported_commands(self):
        return {"one", "two"}

    def configure_new_executable(self, command, crawler_options, output_options):
        return EchoExecutable(command)

    @property
    def help_resource(self):
        return "help/list.txt"


class TestExecutableABC:
    """Tests for the Executable abstract base class."""

    def test_cannot_instantiate_abc(self):
        """Test that Executable cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Executable("list")  # type: ignore

    def test_default_options(self):
        """Test that a new executable has default options."""
        executable = EchoExecutable("echo")
        assert executable.command == "echo"
        assert isinstance(executable.crawler_options, CrawlerOptions)
        assert executable.output_options.output_file is None

    def test_write_output_to_console(self, sample_catalog):
        """Test that output goes to the console without an output file."""
        buffer = StringIO()
        EchoExecutable("echo").execute(sample_catalog, Console(file=buffer))
        assert buffer.getvalue() == "catalog shop\n"

    def test_long_lines_are_not_wrapped(self):
        """Test that console output keeps lines wider than the console."""
        line = " ".join(["main.orders"] * 15)
        buffer = StringIO()
        EchoExecutable("echo").write_output(line, Console(file=buffer, width=80))
        assert buffer.getvalue() == line + "\n"

    def test_write_output_to_file(self, sample_catalog, tmp_path):
        """Test that output goes to the output file when one is set."""
        output_file = tmp_path / "out.txt"
        executable = EchoExecutable("echo")
        executable.output_options = OutputOptions(output_file=output_file)
        executable.execute(sample_catalog)
        assert output_file.read_text(encoding="utf-8") == "catalog shop"

    def test_unwritable_output_file(self, sample_catalog, tmp_path):
        """Test that a write failure becomes an ExecutionError."""
        executable = EchoExecutable("echo")
        executable.output_options = OutputOptions(
            output_file=tmp_path / "missing" / "out.txt"
        )
        with pytest.raises(ExecutionError, match="Cannot write"):
            executable.execute(sample_catalog)

    def test_repr(self):
        assert repr(EchoExecutable("echo")) == "EchoExecutable(command='echo')"


class TestCommandProvider:
    """Tests for the CommandProvider abstract base class."""

    def test_cannot_instantiate_abc(self):
        """Test that CommandProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            CommandProvider()  # type: ignore

    def test_incomplete_provider_cannot_be_instantiated(self):
        """Test that a provider must implement every abstract member."""

        class IncompleteProvider(CommandProvider):
            def supported_commands(self):
                return {"x"}

        with pytest.raises(TypeError):
            IncompleteProvider()

    @pytest.mark.parametrize("command", ["one", "two", "three", ""])
    def test_supports_command_matches_supported_commands(self, command):
        """Test that supports_command agrees with supported_commands."""
        provider = MultiCommandProvider()
        assert provider.supports_command(command) == (
            command in provider.supported_commands()
        )

    def test_default_additional_text_is_empty(self):
        assert MultiCommandProvider().help_additional_text == ""

    def test_get_command_is_deprecated(self):
        """Test that the legacy single-command accessor is rejected."""
        with pytest.raises(DeprecatedAccessError, match="supported_commands"):
            MultiCommandProvider().get_command()

    def test_new_executable_is_deprecated(self):
        """Test that the legacy executable factory is rejected."""
        with pytest.raises(DeprecatedAccessError):
            ListCommandProvider().new_executable(CrawlerOptions(), OutputOptions())

    def test_deprecated_access_is_a_runtime_error(self):
        assert issubclass(DeprecatedAccessError, RuntimeError)


class TestSingleCommandProvider:
    """Tests for SingleCommandProvider."""

    def test_supported_commands(self):
        assert ListCommandProvider().supported_commands() == {"list"}
        assert TemplateCommandProvider().supported_commands() == {"template"}

    def test_configure_new_executable(self):
        """Test that the executable receives both option sets."""
        crawler_options = CrawlerOptions(schema_inclusion_rule=ExcludeAll())
        output_options = OutputOptions(title="Shop")

        executable = ListCommandProvider().configure_new_executable(
            "list", crawler_options, output_options
        )

        assert isinstance(executable, ListExecutable)
        assert executable.command == "list"
        assert executable.crawler_options is crawler_options
        assert executable.output_options is output_options

    def test_new_executable_each_call(self):
        provider = ListCommandProvider()
        first = provider.configure_new_executable(
            "list", CrawlerOptions(), OutputOptions()
        )
        second = provider.configure_new_executable(
            "list", CrawlerOptions(), OutputOptions()
        )
        assert first is not second

    def test_unsupported_command_raises(self):
        """Test that a provider refuses commands it does not support."""
        with pytest.raises(ExecutionError, match="does not support command 'template'"):
            ListCommandProvider().configure_new_executable(
                "template", CrawlerOptions(), OutputOptions()
            )


class TestReadHelp:
    """Tests for help resources."""

    def test_help_resource_path(self):
        path = help_resource_path(ListCommandProvider())
        assert path.name == "list.txt"
        assert path.is_file()

    def test_read_list_help(self):
        text = read_help(ListCommandProvider())
        assert text.startswith("list")
        assert "Template variables" not in text

    def test_read_template_help_includes_variables(self):
        """Test that the additional text follows the help resource."""
        text = read_help(TemplateCommandProvider())
        assert text.startswith("template")
        assert text.endswith(TemplateCommandProvider().help_additional_text)
        assert "\n\nTemplate variables: " in text
        assert "tables" in text

    def test_missing_help_resource(self):
        """Test that a missing help resource raises ExecutionError."""
        with pytest.raises(ExecutionError, match="Help not found"):
            read_help(EchoCommandProvider())
