# bakery_pos/services/export.py
import csv
import io
from datetime import date
from typing import Iterable, List

from bakery_pos.core.errors import EmptyExportError
from bakery_pos.models.sale import Sale

CSV_HEADER = [
    "sale_id",
    "bakery_name",
    "bakery_phone",
    "date_iso",
    "item_name",
    "qty",
    "unit_price",
    "amount",
    "total_amount",
    "status",
]


def sale_rows(sales: Iterable[Sale]) -> List[List[str]]:
    rows = []
    for sale in sales:
        for line in sale.items:
            rows.append([
                sale.id,
                sale.bakery_name,
                sale.bakery_phone,
                sale.created_at.isoformat(),
                line.name,
                str(line.qty),
                str(line.unit_price),
                str(line.amount),
                str(sale.total_amount),
                sale.status.value,
            ])
    return rows


def to_csv(sales: Iterable[Sale]) -> str:
    sales = list(sales)
    if not sales:
        raise EmptyExportError("No sales data to export")
    buf = io.StringIO()
    # QUOTE_MINIMAL quotes any field holding a comma, quote or newline (RFC 4180)
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(sale_rows(sales))
    return buf.getvalue()


def range_filename(from_day: date, to_day: date) -> str:
    return f"sales_{from_day.isoformat()}_to_{to_day.isoformat()}.csv"


def full_filename(day: date) -> str:
    return f"all_sales_{day.isoformat()}.csv"
