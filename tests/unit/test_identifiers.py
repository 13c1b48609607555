import re
from datetime import timezone
from utils.identifiers import generate_record_id, utc_now


def test_record_id_format():
    record_id = generate_record_id("cart")

    assert re.fullmatch(r"cart_\d{13}_[a-z0-9]{9}", record_id)


def test_record_ids_are_unique():
    assert len({generate_record_id("cart") for _ in range(500)}) == 500


def test_utc_now_is_timezone_aware():
    assert utc_now().tzinfo == timezone.utc
