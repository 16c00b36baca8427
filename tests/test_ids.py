"""
Identity and cloning helpers.
"""

import re

from enterprise_ledger.core.ids import deep_copy, new_id, round2
from enterprise_ledger.schemas.inventory import Bom, BomComponent


class TestNewId:
    def test_format_has_prefix_time_and_hex_counter(self):
        assert re.fullmatch(r"stock-move-\d{13}-[0-9a-f]+", new_id("stock-move"))

    def test_ids_are_unique_within_process(self):
        ids = {new_id("lot") for _ in range(500)}
        assert len(ids) == 500


class TestDeepCopy:
    def test_nested_lists_are_not_shared(self):
        bom = Bom(id="bom-x", item_id="X", components=[BomComponent(item_id="C", qty=2)])
        clone = deep_copy(bom)
        clone.components[0].qty = 99
        clone.components.append(BomComponent(item_id="D", qty=1))
        assert bom.components == [BomComponent(item_id="C", qty=2)]

    def test_copy_is_equal(self):
        bom = Bom(id="bom-x", item_id="X", components=[BomComponent(item_id="C", qty=2)])
        assert deep_copy(bom) == bom


class TestRound2:
    def test_half_up(self):
        assert round2(2.675) == 2.68
        assert round2(0.125) == 0.13

    def test_float_noise_is_removed(self):
        assert round2(0.1 + 0.2) == 0.3
