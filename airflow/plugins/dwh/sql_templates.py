"""
SQL Templates Loader Module for the warehouse pipelines.

Every statement the pipelines send to SQL Server is rendered from a Jinja2
template under dwh/sql/, with identifier validation so table and column names
coming from configuration can never inject SQL.

Usage Examples:
--------------

1. Basic template rendering:

    from dwh.sql_templates import render_sql

    sql = render_sql('sqlserver/truncate_table.sql.j2',
                     schema='silver',
                     table='crm_customer')

2. Using custom filters in templates:

    -- SQL Server identifier quoting with brackets
    TRUNCATE TABLE {{ schema | q }}.{{ table | q }}

    -- Quote a whole column list
    SELECT {{ columns | map('q') | join(', ') }}

3. Template variables with StrictUndefined:

    -- All variables must be provided, or an error is raised
    SELECT * FROM {{ schema | q }}.{{ tabel | q }}  -- Raises UndefinedError for 'tabel'

"""
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = logging.getLogger(__name__)

# Templates ship inside the package (dwh/sql/)
SQL_DIR = Path(__file__).parent / "sql"


class IdentifierFilter:
    """
    SQL identifier validator to prevent SQL injection.

    Only allows alphanumeric characters, underscores, and hyphens.
    """

    VALID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')

    @classmethod
    def validate(cls, identifier: str) -> str:
        """
        Validate that an identifier contains only safe characters.

        Args:
            identifier: The SQL identifier to validate

        Returns:
            The validated identifier (unchanged if valid)

        Raises:
            ValueError: If the identifier contains invalid characters
        """
        if not identifier:
            raise ValueError("Identifier cannot be empty")

        if not isinstance(identifier, str):
            raise ValueError(f"Identifier must be a string, got {type(identifier).__name__}")

        if not cls.VALID_PATTERN.match(identifier):
            raise ValueError(
                f"Invalid SQL identifier: '{identifier}'. "
                f"Only alphanumeric characters, underscores, and hyphens are allowed."
            )

        return identifier


def quote_sqlserver(identifier: str) -> str:
    """
    Quote an identifier for SQL Server using brackets.

    Example:
        {{ table_name | q }}  ->  [crm_customer]
    """
    validated = IdentifierFilter.validate(identifier)
    return f'[{validated}]'


class SQLTemplates:
    """
    SQL template loader with Jinja2 environment and security features.

    Attributes:
        env: The Jinja2 Environment configured for SQL templating
        sql_dir: Path to the SQL templates directory
    """

    def __init__(self, sql_dir: Optional[Path] = None):
        self.sql_dir = sql_dir or SQL_DIR

        if not self.sql_dir.exists():
            logger.warning(f"SQL templates directory does not exist: {self.sql_dir}")

        self.env = Environment(
            loader=FileSystemLoader(str(self.sql_dir)),
            undefined=StrictUndefined,
            autoescape=False,  # SQL templates should not be HTML-escaped
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self.env.filters['q'] = quote_sqlserver

    @lru_cache(maxsize=128)
    def _load_template(self, template_path: str):
        return self.env.get_template(template_path)

    def render(self, template_path: str, **kwargs: Any) -> str:
        """
        Render a SQL template with the given variables.

        Args:
            template_path: Relative path to the template from sql_dir
                          (e.g., 'sqlserver/insert_rows.sql.j2')
            **kwargs: Template variables to substitute

        Returns:
            The rendered SQL string

        Raises:
            TemplateNotFound: If the template file doesn't exist
            jinja2.UndefinedError: If a required variable is missing
            ValueError: If an identifier validation fails
        """
        template = self._load_template(template_path)
        return template.render(**kwargs)


_sql_templates_instance: Optional[SQLTemplates] = None


def get_sql_templates() -> SQLTemplates:
    """Get the shared SQLTemplates instance."""
    global _sql_templates_instance
    if _sql_templates_instance is None:
        _sql_templates_instance = SQLTemplates()
    return _sql_templates_instance


def render_sql(template_path: str, **kwargs: Any) -> str:
    """
    Convenience function to render a SQL template.

    Example:
        from dwh.sql_templates import render_sql

        sql = render_sql('sqlserver/select_table.sql.j2',
                         schema='bronze',
                         table='crm_cust_info',
                         columns=['cst_id', 'cst_key'])
    """
    return get_sql_templates().render(template_path, **kwargs)
