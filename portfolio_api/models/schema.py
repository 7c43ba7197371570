from typing import List

from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex, CreateTable

from .base import Base
from . import admin, interaction, project, site_config  # noqa: F401  (register tables)


def ddl_statements() -> List[str]:
    """
    CREATE TABLE / CREATE INDEX statements for every table, idempotent.

    The ORM classes are only used as table definitions; queries go through
    asyncpg directly.
    """
    dialect = postgresql.dialect()
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)))
        for index in sorted(table.indexes, key=lambda i: i.name):
            statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)))
    return statements
