import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

HOTELS_JSONL = (
    '{"id": "BER00002", "city_code": "BER", "name": "Crowne Plaza Berlin City Centre", '
    '"category": 4.0, "country_code": "DE", "city": "Berlin"}\n'
    '{"id": "BER00003", "city_code": "BER", "name": "Berlin Marriott Hotel", '
    '"category": 5.0, "country_code": "DE", "city": "Berlin"}\n'
)

ROOMS_CSV = (
    "BER00002|EXPEDIA|Standard Single Room|SGL\n"
    "BER00002|EXPEDIA|Double Room Sea View|DBL\n"
    "BER00003|HRS|Deluxe King|DLX\n"
)

INPUT_HEADER = "city_code|hotel_code|room_type|room_code|meal|checkin|adults|children|price|source\n"

INPUT_CSV = INPUT_HEADER + (
    "BER|BER00002|EZ|SGL|NO|20180721|1|0|85.50|EXPEDIA\n"
    "BER|BER00003|DZ|DLX|BB|20180722|2|1|300.00|HRS\n"
)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    (tmp_path / "hotels.json").write_text(HOTELS_JSONL, encoding="utf-8")
    (tmp_path / "room_names.csv").write_text(ROOMS_CSV, encoding="utf-8")
    (tmp_path / "input.csv").write_text(INPUT_CSV, encoding="utf-8")
    return tmp_path
