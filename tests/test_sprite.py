from typing import Any, Dict, Optional

import pytest

from sb2stats.categories import BlockCategory
from sb2stats.diagnostics import DiagnosticContext, DiagnosticLevel
from sb2stats.errors import MalformedInputError
from sb2stats.sprite import SpriteRecord, analyze_sprite, count_occurrences, tally_blocks


SCENARIO_TABLE = {
    "motion_move": "motion",
    "control_if": "control",
    "motion_turn": "motion",
}


def _scenario_classify(name: str) -> Optional[str]:
    return SCENARIO_TABLE.get(name)


def _sprite(**overrides: Any) -> Dict[str, Any]:
    sprite: Dict[str, Any] = {
        "objName": "Cat",
        "scripts": [],
        "variables": [],
        "lists": [],
        "scriptComments": [],
        "sounds": [],
        "costumes": [],
    }
    sprite.update(overrides)
    return sprite


def _empty_counts() -> Dict[BlockCategory, int]:
    return {category: 0 for category in BlockCategory}


def test_nested_blocks_are_counted_per_category() -> None:
    scripts = [["motion_move", 10], ["control_if", ["motion_turn", 5]]]
    record = analyze_sprite(_sprite(scripts=scripts), _scenario_classify)
    assert record.motion_blocks == 2
    assert record.control_blocks == 1
    others = [c for c in BlockCategory if c not in (BlockCategory.MOTION, BlockCategory.CONTROL)]
    assert all(record.block_counts[c] == 0 for c in others)
    assert record.script_count == 2


def test_empty_scripts_give_zero_counts() -> None:
    record = analyze_sprite(_sprite(), _scenario_classify)
    assert record.total_blocks == 0
    assert record.script_count == 0
    assert record.variables == ()
    assert record.lists == ()


def test_missing_optional_collections_read_as_empty() -> None:
    sprite = {"objName": "Ball", "sounds": [{}], "costumes": [{}, {}]}
    record = analyze_sprite(sprite)
    assert record.script_count == 0
    assert record.variable_count == 0
    assert record.list_count == 0
    assert record.script_comment_count == 0
    assert record.sound_count == 1
    assert record.costume_count == 2
    assert record.total_blocks == 0


def test_unknown_block_contributes_nothing() -> None:
    record = analyze_sprite(_sprite(scripts=[["foo_bar", 1]]), _scenario_classify)
    assert record.total_blocks == 0


def test_unknown_blocks_are_noted_once() -> None:
    ctx = DiagnosticContext(sprite_name="Cat")
    scripts = [["foo_bar"], ["foo_bar", ["baz"]]]
    analyze_sprite(_sprite(scripts=scripts), _scenario_classify, ctx)
    messages = [d.message for d in ctx.diagnostics]
    assert messages == ["Unclassified block 'baz'", "Unclassified block 'foo_bar'"]
    assert all(d.level == DiagnosticLevel.INFO for d in ctx.diagnostics)


def test_tally_visits_list_at_index_zero() -> None:
    counts = _empty_counts()
    tally_blocks([["motion_move"], ["motion_turn", ["control_if"]]], _scenario_classify, counts)
    assert counts[BlockCategory.MOTION] == 2
    assert counts[BlockCategory.CONTROL] == 1


def test_tally_ignores_none_and_empty() -> None:
    counts = _empty_counts()
    tally_blocks(None, _scenario_classify, counts)
    tally_blocks([], _scenario_classify, counts)
    assert sum(counts.values()) == 0


def test_tally_is_order_independent() -> None:
    first = _empty_counts()
    second = _empty_counts()
    tally_blocks([["control_if", ["motion_turn"], ["motion_move"]]], _scenario_classify, first)
    tally_blocks([["control_if", ["motion_move"], ["motion_turn"]]], _scenario_classify, second)
    assert first == second


def test_scratch2_script_with_default_table() -> None:
    scripts = [
        [20, 40, [
            ["whenGreenFlag"],
            ["doForever", [
                ["forward:", 10],
                ["doIf", ["touching:", "_edge_"], [["turnRight:", ["randomFrom:to:", 90, 180]]]],
                ["setVar:to:", "score", ["+", ["readVariable", "score"], 1]],
            ]],
        ]],
        [200, 40, [["procDef", "jump %n", ["height"], [10], False], ["call", "jump %n", 5]]],
    ]
    record = analyze_sprite(_sprite(scripts=scripts))
    assert record.events_blocks == 1
    assert record.control_blocks == 2
    assert record.motion_blocks == 2
    assert record.sensing_blocks == 1
    assert record.operators_blocks == 2
    assert record.data_blocks == 2
    assert record.more_blocks_blocks == 2
    assert record.looks_blocks == 0
    assert record.total_blocks == 12


def test_classifier_may_return_enum_or_label() -> None:
    def classify(name: str) -> Any:
        return {"a": BlockCategory.PEN, "b": "more blocks", "c": "unknown"}.get(name)

    record = analyze_sprite(_sprite(scripts=[["a"], ["b"], ["c"]]), classify)
    assert record.pen_blocks == 1
    assert record.more_blocks_blocks == 1
    assert record.total_blocks == 2


def test_category_sum_bounded_by_named_nodes() -> None:
    scripts = [["motion_move", ["foo"], ["control_if", ["x", ["motion_turn"]]]]]
    record = analyze_sprite(_sprite(scripts=scripts), _scenario_classify)
    # named nodes: motion_move, foo, control_if, x, motion_turn
    assert record.total_blocks == 3
    assert record.total_blocks <= 5


def test_variables_and_lists_keep_input_order() -> None:
    sprite = _sprite(
        variables=[{"name": "score", "value": 0}, {"name": "lives", "value": 3}],
        lists=[{"listName": "items", "contents": []}],
    )
    record = analyze_sprite(sprite)
    assert record.variables == ("score", "lives")
    assert record.variable_count == 2
    assert record.lists == ("items",)
    assert record.list_count == 1


def test_variable_usage_counts_verbatim_occurrences() -> None:
    scripts = [[0, 0, [["setVar:to:", "score", 0], ["changeVar:by:", "lives", -1]]]]
    sprite = _sprite(
        scripts=scripts,
        variables=[{"name": "score"}, {"name": "lives"}],
        lists=[{"listName": "inventory"}],
    )
    record = analyze_sprite(sprite)
    assert record.variable_usage_count("score") == 1
    assert record.variable_usage_count("lives") == 1
    assert record.list_usage_count("inventory") == 0


def test_usage_count_includes_overlaps() -> None:
    assert count_occurrences("aaa", "aa") == 2
    assert count_occurrences("abc", "") == 0
    record = analyze_sprite(_sprite(scripts=[["aaa"]]))
    assert record.variable_usage_count("aa") == 2


def test_missing_name_raises() -> None:
    sprite = _sprite()
    del sprite["objName"]
    with pytest.raises(MalformedInputError) as excinfo:
        analyze_sprite(sprite)
    assert excinfo.value.field == "objName"


def test_missing_costumes_raises() -> None:
    sprite = _sprite()
    del sprite["costumes"]
    with pytest.raises(MalformedInputError):
        analyze_sprite(sprite)


def test_wrong_field_shape_raises() -> None:
    with pytest.raises(MalformedInputError) as excinfo:
        analyze_sprite(_sprite(scripts={"not": "an array"}))
    assert excinfo.value.field == "scripts"
    assert "got object" in str(excinfo.value)


def test_malformed_variable_entry_raises() -> None:
    with pytest.raises(MalformedInputError) as excinfo:
        analyze_sprite(_sprite(variables=[{"name": "ok"}, {"value": 1}]))
    assert excinfo.value.field == "variables"
    assert "variables[1]" in excinfo.value.message


def test_non_object_list_entry_raises() -> None:
    with pytest.raises(MalformedInputError):
        analyze_sprite(_sprite(lists=["items"]))


def test_non_object_sprite_raises() -> None:
    with pytest.raises(MalformedInputError):
        analyze_sprite([])


def test_usage_count_finds_names_with_slashes() -> None:
    record = analyze_sprite(_sprite(scripts=[["setVar:to:", "hp/max", 1]], variables=[{"name": "hp/max"}]))
    assert record.variable_usage_count("hp/max") == 1


def test_sprite_record_is_unhashable() -> None:
    record = analyze_sprite(_sprite())
    assert SpriteRecord.__hash__ is None
    with pytest.raises(TypeError):
        hash(record)
    assert record == analyze_sprite(_sprite())
