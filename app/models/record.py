from sqlalchemy import JSON, Column, DateTime, MetaData, String, Table


def record_table(name: str, metadata: MetaData | None = None) -> Table:
    """Key-value table: one JSON item per record id."""
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("id", String(64), primary_key=True),
        Column("item", JSON, nullable=False),
        Column("stored_at", DateTime(timezone=True), nullable=False),
    )
