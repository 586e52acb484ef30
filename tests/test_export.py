import csv
import io
from datetime import date

import pytest

from bakery_pos.core.errors import EmptyExportError
from bakery_pos.models.sale import SaleStatus
from bakery_pos.services.export import CSV_HEADER, full_filename, range_filename, to_csv
from conftest import make_sale, utc


def parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_one_row_per_line_item():
    sales = [
        make_sale("s1", utc(2024, 1, 1, 6, 30), [("Bun", 3, "10"), ("Loaf", 1, "50")]),
        make_sale("s2", utc(2024, 1, 2, 6, 30), [("Rusk", 2, "12.50")], status=SaleStatus.pending),
    ]
    rows = parse(to_csv(sales))
    assert rows[0] == CSV_HEADER
    assert len(rows) - 1 == 3
    assert rows[1] == [
        "s1",
        "Sunrise Bakery",
        "9000000001",
        "2024-01-01T06:30:00+00:00",
        "Bun",
        "3",
        "10",
        "30",
        "80",
        "saved",
    ]
    assert rows[3][0] == "s2"
    assert rows[3][-1] == "pending"


def test_header_is_fixed():
    text = to_csv([make_sale("s1", utc(2024, 1, 1), [("Bun", 1, "10")])])
    assert text.splitlines()[0] == (
        "sale_id,bakery_name,bakery_phone,date_iso,item_name,qty,unit_price,amount,total_amount,status"
    )


def test_names_with_delimiters_are_quoted():
    sale = make_sale("s1", utc(2024, 1, 1), [('Bun, "large"', 1, "10")], bakery_name="Smith, Sons\nBakers")
    text = to_csv([sale])
    assert '"Smith, Sons\nBakers"' in text
    rows = parse(text)
    assert len(rows) == 2
    assert rows[1][1] == "Smith, Sons\nBakers"
    assert rows[1][4] == 'Bun, "large"'


def test_empty_export_fails():
    with pytest.raises(EmptyExportError):
        to_csv([])


def test_filenames():
    assert range_filename(date(2024, 1, 1), date(2024, 1, 31)) == "sales_2024-01-01_to_2024-01-31.csv"
    assert full_filename(date(2024, 2, 1)) == "all_sales_2024-02-01.csv"
