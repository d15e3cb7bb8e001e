from carrynote.domain.delivery_type import DeliveryType
from carrynote.domain.report import ParsedReportLine
from carrynote.line.matcher import (
    find_delivery_type,
    match_exact,
    match_keyword_alias,
    match_report_lines,
    match_substring,
)

YAMATO = DeliveryType(id="t1", name="ヤマト宅急便", unit_price=150)
SAGAWA = DeliveryType(id="t2", name="佐川急便", unit_price=140)
NEKOPOS = DeliveryType(id="t3", name="ネコポス", unit_price=80)
EXPRESS = DeliveryType(id="t4", name="Express", unit_price=300)
TYPES = [YAMATO, SAGAWA, NEKOPOS, EXPRESS]


def test_exact_match_ignores_case():
    assert match_exact("express", TYPES) is EXPRESS
    assert match_exact("ヤマト", TYPES) is None


def test_substring_match_label_inside_name():
    assert match_exact("ヤマト", TYPES) is None
    assert match_substring("ヤマト", TYPES) is YAMATO
    assert find_delivery_type("ヤマト", TYPES) is YAMATO


def test_substring_match_name_inside_label():
    assert find_delivery_type("ネコポス午前", TYPES) is NEKOPOS


def test_exact_match_has_priority_over_substring():
    short = DeliveryType(id="t5", name="ヤマト", unit_price=100)
    types = [YAMATO, short]
    assert find_delivery_type("ヤマト", types) is short


def test_keyword_alias_match():
    assert match_substring("yamato", TYPES) is None
    assert match_keyword_alias("Yamato", TYPES) is YAMATO
    assert find_delivery_type("さがわ", TYPES) is SAGAWA
    assert find_delivery_type("nekopos", TYPES) is NEKOPOS
    assert find_delivery_type("たっきゅうびん", TYPES) is YAMATO


def test_keyword_alias_without_registered_keyword():
    assert find_delivery_type("sagawa", [YAMATO, NEKOPOS]) is None


def test_empty_type_name_never_matches():
    blank = DeliveryType(id="t0", name="", unit_price=1)
    assert find_delivery_type("なにか", [blank]) is None


def test_unmatched_labels_do_not_stop_processing():
    lines = [
        ParsedReportLine(raw_type_name="謎の便", quantity=5),
        ParsedReportLine(raw_type_name="ヤマト", quantity=30),
        ParsedReportLine(raw_type_name="不明", quantity=1),
        ParsedReportLine(raw_type_name="佐川", quantity=20),
    ]
    matched, unmatched = match_report_lines(lines, TYPES)
    assert unmatched == ["謎の便", "不明"]
    assert [(m.delivery_type_id, m.quantity, m.amount) for m in matched] == [
        ("t1", 30, 4500),
        ("t2", 20, 2800),
    ]
