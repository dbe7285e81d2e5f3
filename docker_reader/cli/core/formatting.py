from __future__ import annotations

from collections.abc import Sequence

from docker_reader.cli.container.models import ContainerRecord

TABLE_HEADERS = ("ID", "Name", "Image", "Status", "Ports", "Created")


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [max([len(header), *(len(row[i] or "") for row in rows)]) for i, header in enumerate(headers)]
    header_row = " | ".join(header.ljust(widths[i]) for i, header in enumerate(headers))
    separator = " | ".join("-" * width for width in widths)
    data_rows = [" | ".join((cell or "").ljust(widths[i]) for i, cell in enumerate(row)) for row in rows]
    return "\n".join([header_row, separator, *data_rows])


def format_container_table(containers: Sequence[ContainerRecord]) -> str:
    rows = [(c.short_id, c.name, c.image, c.status, c.ports or "N/A", c.created) for c in containers]
    return format_table(TABLE_HEADERS, rows)


def format_container_list(containers: Sequence[ContainerRecord]) -> str:
    count = len(containers)
    return f"Found {count} container{'s' if count != 1 else ''}:\n\n{format_container_table(containers)}"


def describe_container(container: ContainerRecord) -> str:
    return f"'{container.name}' ({container.short_id})"
