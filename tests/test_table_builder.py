from __future__ import annotations

import pytest

from config import IndexLabels
from core.index import (
    AlphabeticalIndex,
    Category,
    Entity,
    EntityKind,
    IndexInputError,
    IndexItem,
    JavadocCommentRenderer,
    RowRenderer,
    TabTableBuilder,
)


class NameResolver:
    def link(self, entity: Entity) -> str:
        return entity.name


def _builder(**kwargs) -> TabTableBuilder:
    renderer = RowRenderer(NameResolver(), JavadocCommentRenderer(), IndexLabels())
    return TabTableBuilder(renderer, **kwargs)


def _names(rows) -> list:
    return [r.entity.name for r in rows]


def test_mixed_entities_produce_default_and_category_tabs() -> None:
    entities = [
        Entity(name="Gamma", kind=EntityKind.INTERFACE, deprecated=True, deprecation_notes=("use X",)),
        Entity(name="beta", kind=EntityKind.CLASS, doc_comment="/** Second letter. */"),
        Entity(name="Alpha", kind=EntityKind.INTERFACE),
    ]

    model = _builder().build(AlphabeticalIndex.from_entities(entities))

    assert _names(model.rows) == ["Alpha", "beta", "Gamma"]
    assert [t.key for t in model.tabs] == ["interface", "class"]
    assert _names(model.tab("interface").rows) == ["Alpha", "Gamma"]
    assert _names(model.tab("class").rows) == ["beta"]
    assert model.tab("enum") is None

    gamma = model.rows[2]
    assert gamma.description.startswith("Deprecated.")
    assert gamma.description.endswith("use X")
    assert model.rows[1].description == "Second letter."

    assert not model.is_empty
    assert model.needs_filtering is True
    assert model.script is not None
    assert model.caption == "All Classes"
    assert model.headers == ("Class", "Description")


def test_filter_script_masks_and_tab_ids() -> None:
    entities = [
        Entity(name="Alpha", kind=EntityKind.INTERFACE),
        Entity(name="beta", kind=EntityKind.CLASS),
        Entity(name="Gamma", kind=EntityKind.INTERFACE),
    ]

    model = _builder(table_id="demo").build(AlphabeticalIndex.from_entities(entities))

    assert model.default_tab.tab_id == "demo-tab0"
    assert model.tab("interface").tab_id == "demo-tab1"
    assert model.tab("class").tab_id == "demo-tab2"
    assert dict(model.script.row_masks) == {"i0": 1, "i1": 2, "i2": 1}
    assert model.script.tabs == (
        (63, "demo-tab0", "All Classes"),
        (1, "demo-tab1", "Interface Summary"),
        (2, "demo-tab2", "Class Summary"),
    )
    js = model.script.to_javascript()
    assert js.startswith("var data = ")
    assert '"i0": 1' in js


def test_filter_script_masks_cannot_be_mutated() -> None:
    entities = [
        Entity(name="Alpha", kind=EntityKind.INTERFACE),
        Entity(name="beta", kind=EntityKind.CLASS),
    ]

    model = _builder().build(AlphabeticalIndex.from_entities(entities))

    with pytest.raises(TypeError):
        model.script.row_masks["i0"] = 99  # type: ignore[index]
    assert model.script.to_dict()["data"] == {"i0": 1, "i1": 2}


def test_single_entity_needs_no_filtering() -> None:
    model = _builder().build(
        AlphabeticalIndex.from_entities([Entity(name="Only", kind=EntityKind.CLASS)])
    )

    assert len(model.rows) == 1
    assert [t.key for t in model.tabs] == ["class"]
    assert model.needs_filtering is False
    assert model.script is None
    # A single tab covering every row replaces the default caption.
    assert model.caption == "Class Summary"


def test_category_subset_of_rows_is_a_distinct_view() -> None:
    entities = [
        Entity(name="Plain", kind=EntityKind.CLASS),
        Entity(name="Point", kind=EntityKind.RECORD),
    ]

    model = _builder().build(AlphabeticalIndex.from_entities(entities))

    assert _names(model.rows) == ["Plain", "Point"]
    assert _names(model.tab("class").rows) == ["Plain"]
    assert model.needs_filtering is True
    assert model.rows[1].tab_keys == ()
    assert model.script.row_masks["i1"] == 0


def test_records_only_have_no_category_tabs() -> None:
    model = _builder().build(
        AlphabeticalIndex.from_entities(
            [Entity(name="P", kind=EntityKind.RECORD), Entity(name="Q", kind=EntityKind.RECORD)]
        )
    )

    assert len(model.rows) == 2
    assert model.tabs == ()
    assert model.needs_filtering is False
    assert model.caption == "All Classes"


def test_empty_index_marks_model_empty() -> None:
    model = _builder().build(AlphabeticalIndex({}))

    assert model.is_empty
    assert model.rows == ()
    assert model.tabs == ()
    assert model.needs_filtering is False
    assert model.script is None


def test_missing_and_non_core_items_are_skipped() -> None:
    hidden = Entity(name="Hidden", kind=EntityKind.CLASS, is_core=False)
    shown = Entity(name="Shown", kind=EntityKind.ENUM)
    index = AlphabeticalIndex(
        {
            "H": [IndexItem.of(hidden)],
            "M": [IndexItem.missing("Missing")],
            "S": [IndexItem.of(shown)],
        }
    )

    model = _builder().build(index)

    assert _names(model.rows) == ["Shown"]
    assert [t.key for t in model.tabs] == ["enum"]
    assert model.rows[0].row_id == "i0"


def test_only_missing_items_yield_empty_model() -> None:
    index = AlphabeticalIndex({"X": [IndexItem.missing("Xylophone")]})

    model = _builder().build(index)

    assert model.is_empty
    assert model.needs_filtering is False


def test_overlapping_categories_put_row_in_each_tab() -> None:
    categories = [
        Category("short", "Short Names", lambda e: len(e.name) <= 3),
        Category("upper", "Upper Names", lambda e: e.name[:1].isupper()),
    ]
    entities = [
        Entity(name="Abc", kind=EntityKind.CLASS),
        Entity(name="bcdef", kind=EntityKind.CLASS),
        Entity(name="Cdefg", kind=EntityKind.CLASS),
    ]

    model = _builder(categories=categories).build(AlphabeticalIndex.from_entities(entities))

    assert _names(model.tab("short").rows) == ["Abc"]
    assert _names(model.tab("upper").rows) == ["Abc", "Cdefg"]
    assert model.rows[0].tab_keys == ("short", "upper")
    assert len(model.rows) == 3
    assert model.needs_filtering is True


def test_default_view_contains_each_entity_once_in_traversal_order() -> None:
    entities = [
        Entity(name="zeta", kind=EntityKind.CLASS),
        Entity(name="Apple", kind=EntityKind.INTERFACE),
        Entity(name="apricot", kind=EntityKind.ENUM),
        Entity(name="Banana", kind=EntityKind.ANNOTATION_TYPE),
        Entity(name="alpha", kind=EntityKind.CLASS),
    ]

    model = _builder().build(AlphabeticalIndex.from_entities(entities))

    assert _names(model.rows) == ["alpha", "Apple", "apricot", "Banana", "zeta"]
    assert len({r.row_id for r in model.rows}) == 5
    for tab in model.tabs:
        assert len(set(tab.row_ids)) == len(tab.row_ids)


def test_build_does_not_resort_index_buckets() -> None:
    class FixedIndex:
        def ordered_characters(self):
            return ["B", "A"]

        def items_for(self, character):
            names = {"B": ["Bz", "Ba"], "A": ["Aa"]}[character]
            return [IndexItem.of(Entity(name=n, kind=EntityKind.CLASS)) for n in names]

    model = _builder().build(FixedIndex())

    assert _names(model.rows) == ["Bz", "Ba", "Aa"]


def test_failing_index_raises_index_input_error() -> None:
    class BrokenIndex:
        def ordered_characters(self):
            return ["A"]

        def items_for(self, character):
            raise KeyError(character)

    with pytest.raises(IndexInputError):
        _builder().build(BrokenIndex())


def test_non_item_entries_raise_index_input_error() -> None:
    class BadItems:
        def ordered_characters(self):
            return ["A"]

        def items_for(self, character):
            return ["Alpha"]

    with pytest.raises(IndexInputError):
        _builder().build(BadItems())


def test_multi_character_key_raises_index_input_error() -> None:
    class BadCharacters:
        def ordered_characters(self):
            return ["AB"]

        def items_for(self, character):
            return []

    with pytest.raises(IndexInputError):
        _builder().build(BadCharacters())


def test_duplicate_entity_raises_index_input_error() -> None:
    entity = Entity(name="Twice", kind=EntityKind.CLASS, qualified_name="x.Twice")
    index = AlphabeticalIndex({"T": [IndexItem.of(entity), IndexItem.of(entity)]})

    with pytest.raises(IndexInputError):
        _builder().build(index)


def test_custom_labels_flow_into_model() -> None:
    labels = IndexLabels(all_classes="Toutes les classes", class_summary="Classes")
    renderer = RowRenderer(NameResolver(), JavadocCommentRenderer(), labels)
    builder = TabTableBuilder(renderer, labels=labels)

    model = builder.build(
        AlphabeticalIndex.from_entities(
            [Entity(name="A", kind=EntityKind.CLASS), Entity(name="B", kind=EntityKind.RECORD)]
        )
    )

    assert model.default_tab.label == "Toutes les classes"
    assert model.tab("class").label == "Classes"
