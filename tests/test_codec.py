"""
Tests for the share-link codec.
"""

import base64
import json

import pytest

from pricecard.codec import ConfigFormatError, decode, dumps, encode, from_payload, to_payload
from pricecard.models import AppData, Category, ItemKind, MenuItem



def _token(payload) -> str:
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


class TestRoundTrip:
    """encode/decode keeps every field."""

    def test_ascii_round_trip(self, sample_data):
        assert decode(encode(sample_data)) == sample_data

    def test_cjk_round_trip(self, cjk_data):
        token = encode(cjk_data)
        assert token
        assert token.isascii()
        assert decode(token) == cjk_data

    def test_empty_config_round_trip(self):
        assert decode(encode(AppData())) == AppData()

    def test_token_with_hash_prefix(self, sample_data):
        assert decode("#" + encode(sample_data)) == sample_data

    def test_token_without_padding(self, sample_data):
        token = encode(sample_data).rstrip("=")
        assert decode(token) == sample_data

    def test_percent_encoded_token(self, sample_data):
        token = encode(sample_data).replace("+", "%2B").replace("/", "%2F").replace("=", "%3D")
        assert decode(token) == sample_data


class TestWireShape:
    """Payload field names stay compatible with existing share links."""

    def test_payload_keys(self, sample_data):
        payload = to_payload(sample_data)
        assert set(payload) == {"menu", "modifiers"}
        assert payload["menu"][0]["items"][1] == {
            "id": "item-art",
            "name": "Nail Art",
            "price": 300,
            "type": "counter",
        }
        assert payload["modifiers"][0] == {"id": "mod-vip", "name": "VIP", "value": -10}

    def test_dumps_keeps_unicode(self, cjk_data):
        assert "基礎手部護理" in dumps(cjk_data)

    def test_nan_price_written_as_null(self):
        data = AppData(categories=(Category("c", "C", (MenuItem("i", "I", float("nan")),)),))
        assert to_payload(data)["menu"][0]["items"][0]["price"] is None

    def test_categories_key_accepted(self):
        data = from_payload({"categories": [{"id": "c", "title": "C", "items": []}]})
        assert data.categories[0].id == "c"

    def test_missing_modifiers_means_none(self):
        data = from_payload({"menu": []})
        assert data.modifiers == ()


class TestLegacyShape:
    """A bare list is a menu-only link."""

    def test_bare_list_decodes_with_no_modifiers(self):
        legacy = [
            {
                "id": "cat-1",
                "title": "Old",
                "items": [{"id": "i-1", "name": "Polish", "price": 400, "type": "toggle"}],
            }
        ]
        data = decode(_token(legacy))
        assert data == AppData(
            categories=(Category("cat-1", "Old", (MenuItem("i-1", "Polish", 400, ItemKind.TOGGLE),)),),
            modifiers=(),
        )


class TestDecodeFailure:
    """Unusable tokens yield None, never a partial object."""

    @pytest.mark.parametrize("token", ["", "#", "!!!not-base64!!!", "abc"])
    def test_garbage(self, token):
        assert decode(token) is None

    def test_not_json(self):
        assert decode(base64.b64encode(b"{not json").decode()) is None

    def test_not_utf8(self):
        assert decode(base64.b64encode(b"\xff\xfe\xfd").decode()) is None

    def test_scalar_payload(self):
        assert decode(_token(42)) is None

    def test_unknown_item_type(self):
        payload = {"menu": [{"id": "c", "title": "C", "items": [{"id": "i", "name": "I", "price": 1, "type": "combo"}]}]}
        assert decode(_token(payload)) is None

    def test_half_valid_payload(self):
        payload = {
            "menu": [
                {"id": "c1", "title": "Fine", "items": []},
                {"id": "c2", "title": "Broken", "items": [{"id": "i", "name": "I"}]},
            ]
        }
        assert decode(_token(payload)) is None

    def test_from_payload_raises_format_error(self):
        with pytest.raises(ConfigFormatError):
            from_payload({"menu": "nope"})

    def test_boolean_price_rejected(self):
        with pytest.raises(ConfigFormatError):
            from_payload({"menu": [{"id": "c", "title": "C", "items": [{"id": "i", "name": "I", "price": True, "type": "toggle"}]}]})
