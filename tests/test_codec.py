import json

from sales_agent.app.schemas.lead import Lead
from sales_agent.app.storage.codec import decode_list, encode_list


def test_encode_list():
    assert json.loads(encode_list(["a", "b"])) == ["a", "b"]
    assert encode_list(None) == "[]"


def test_decode_list_reads_json_arrays():
    assert decode_list('["vip", "q3"]') == ["vip", "q3"]
    assert decode_list(b'["x"]') == ["x"]
    assert decode_list(["already", "decoded"]) == ["already", "decoded"]


def test_decode_list_degrades_to_empty():
    assert decode_list("not json") == []
    assert decode_list('{"a": 1}') == []
    assert decode_list("") == []
    assert decode_list(None) == []
    assert decode_list(42) == []


def test_records_decode_malformed_lists_without_error():
    lead = Lead.model_validate(
        {
            "id": "l1",
            "name": "Ada",
            "email": "ada@x.com",
            "company": "AE",
            "source": "Referral",
            "notes": "[broken",
            "tags": '["vip"]',
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "2024-01-01T00:00:00Z",
        }
    )
    assert lead.notes == []
    assert lead.tags == ["vip"]
