"""Tests for the template command."""

from io import StringIO

import pytest
from rich.console import Console

from dbcrawler.catalog import Catalog
from dbcrawler.crawl.options import OutputOptions
from dbcrawler.tools.base import ExecutionError
from dbcrawler.tools.template import (
    RelativeFileSystemLoader,
    TemplateCommandProvider,
    TemplateExecutable,
    render_template,
    template_variables,
)

TABLES_TEMPLATE = (
    "# {{ title }}\n"
    "{% for table in tables %}{{ table.full_name }} ({{ table.table_type }})\n"
    "{% for column in table.columns %}"
    "- {{ column.name }}: {{ column.type_name }}"
    " -> {{ column.column_data_type.mapped_class_name }}\n"
    "{% endfor %}{% endfor %}"
)


class TestTemplateVariables:
    """Tests for template_variables."""

    def test_variables(self, sample_catalog):
        variables = template_variables(sample_catalog)
        assert variables["title"] == "shop"
        assert variables["catalog"] is sample_catalog
        assert [t.name for t in variables["tables"]] == ["big_orders", "orders"]
        assert [t.name for t in variables["column_data_types"]] == ["MONEY"]
        assert [t.name for t in variables["system_column_data_types"]] == ["INTEGER"]

    def test_title_fallbacks(self):
        assert template_variables(Catalog("x"), "Docs")["title"] == "Docs"
        assert template_variables(Catalog())["title"] == "Catalog"


class TestRenderTemplate:
    """Tests for render_template."""

    def test_render_tables(self, sample_catalog):
        output = render_template(TABLES_TEMPLATE, sample_catalog, title="Shop")
        assert output.startswith("# Shop\n")
        assert "main.orders (TABLE)\n- order_id: INTEGER -> int\n" in output
        assert "- total: MONEY -> decimal.Decimal\n" in output
        assert "main.big_orders (VIEW)\n" in output

    def test_routines(self, sample_catalog):
        output = render_template(
            "{% for r in routines %}{{ r.full_name }}/{{ r.routine_type.value }}{% endfor %}",
            sample_catalog,
        )
        assert output == "main.order_total/function"

    def test_newlines_after_block_tags_are_kept(self, sample_catalog):
        """Test that a newline after a block tag ends up in the output."""
        output = render_template(
            "{% for t in tables %}{{ t.name }}\n{% endfor %}", sample_catalog
        )
        assert output.splitlines() == ["big_orders", "orders"]

        output = render_template(
            "{% for t in tables %}\n{{ t.name }}{% endfor %}", sample_catalog
        )
        assert output == "\nbig_orders\norders"

    def test_undefined_variable(self, sample_catalog):
        """Test that undefined variables are reported."""
        with pytest.raises(ExecutionError, match="Undefined variable"):
            render_template("{{ nothing_here }}", sample_catalog)

    def test_syntax_error(self, sample_catalog):
        with pytest.raises(ExecutionError, match="Template error"):
            render_template("{% for x in tables %}", sample_catalog)

    def test_relative_include(self, sample_catalog, tmp_path):
        """Test that includes resolve relative to the template file."""
        (tmp_path / "partials").mkdir()
        (tmp_path / "partials" / "header.j2").write_text("== {{ title }} ==")
        main = tmp_path / "main.j2"
        source = '{% include "partials/header.j2" %} {{ tables | length }}'
        main.write_text(source)

        output = render_template(source, sample_catalog, title="Shop", source_path=main)
        assert output == "== Shop == 2"

    def test_missing_include(self, sample_catalog, tmp_path):
        main = tmp_path / "main.j2"
        main.write_text("x")
        with pytest.raises(ExecutionError, match="not found"):
            render_template('{% include "nope.j2" %}', sample_catalog, source_path=main)

    def test_include_without_source_path(self, sample_catalog):
        with pytest.raises(ExecutionError):
            render_template('{% include "nope.j2" %}', sample_catalog)


class TestRelativeFileSystemLoader:
    """Tests for RelativeFileSystemLoader."""

    def test_no_base_path(self):
        from jinja2 import Environment, TemplateNotFound

        loader = RelativeFileSystemLoader()
        with pytest.raises(TemplateNotFound):
            loader.get_source(Environment(), "a.j2")

    def test_loads_relative_file(self, tmp_path):
        from jinja2 import Environment

        (tmp_path / "a.j2").write_text("hello")
        source, filename, uptodate = RelativeFileSystemLoader(tmp_path).get_source(
            Environment(), "a.j2"
        )
        assert source == "hello"
        assert filename == str(tmp_path / "a.j2")
        assert uptodate()


class TestTemplateExecutable:
    """Tests for TemplateExecutable."""

    def test_requires_template(self, sample_catalog):
        """Test that running without a template file fails."""
        with pytest.raises(ExecutionError, match="needs a template file"):
            TemplateExecutable("template").execute(sample_catalog)

    def test_missing_template_file(self, sample_catalog, tmp_path):
        executable = TemplateExecutable("template")
        executable.output_options = OutputOptions(template=tmp_path / "missing.j2")
        with pytest.raises(ExecutionError, match="File not found"):
            executable.execute(sample_catalog)

    def test_render_to_console(self, sample_catalog, tmp_path):
        template = tmp_path / "tables.j2"
        template.write_text("{% for t in tables %}{{ t.name }};{% endfor %}")
        executable = TemplateExecutable("template")
        executable.output_options = OutputOptions(template=template)

        buffer = StringIO()
        executable.execute(sample_catalog, Console(file=buffer, width=120))
        assert buffer.getvalue() == "big_orders;orders;\n"

    def test_render_to_file(self, sample_catalog, tmp_path):
        """Test rendering into an output file."""
        template = tmp_path / "tables.md.j2"
        template.write_text(TABLES_TEMPLATE)
        output_file = tmp_path / "tables.md"
        executable = TemplateExecutable("template")
        executable.output_options = OutputOptions(
            template=template, output_file=output_file, title="Shop"
        )

        executable.execute(sample_catalog)

        content = output_file.read_text(encoding="utf-8")
        assert content.startswith("# Shop\n")
        assert "- order_id: INTEGER -> int" in content


class TestTemplateCommandProvider:
    """Tests for TemplateCommandProvider."""

    def test_additional_text_lists_variables(self):
        text = TemplateCommandProvider().help_additional_text
        assert text.startswith("Template variables: ")
        for name in ("catalog", "schemas", "tables", "routines", "title"):
            assert name in text
