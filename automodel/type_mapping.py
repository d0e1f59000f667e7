"""Database type mapping utilities."""

from automodel.models import ColumnType


def map_database_type_to_column_type(db_type: str) -> ColumnType:
    """Map a database-specific column type to a column type tag.

    Args:
        db_type: The database column type (e.g., 'VARCHAR(255)', 'INTEGER', 'BIT')

    Returns:
        The column type tag
    """
    db_type_lower = db_type.lower()

    # Boolean types (MSSQL reports BIT)
    if any(t in db_type_lower for t in ["bool", "boolean"]) or db_type_lower == "bit":
        return ColumnType.BOOLEAN

    # Date/time types - 'datetime' and 'timestamp' before 'date'
    if any(t in db_type_lower for t in ["timestamp", "datetime"]):
        return ColumnType.DATETIME
    if "date" in db_type_lower:
        return ColumnType.DATE

    # Common integer types
    if any(t in db_type_lower for t in ["int", "integer", "smallint", "tinyint", "mediumint", "serial"]):
        return ColumnType.INTEGER

    # Text types
    if any(t in db_type_lower for t in ["char", "varchar", "text", "clob", "string", "uuid"]):
        return ColumnType.STRING

    return ColumnType.OTHER
