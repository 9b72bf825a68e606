"""Tests moteur de mutations — update / delete / reorder / champs de forme."""
import itertools

import pytest
from pydantic import ValidationError

from block_cms.blocks import ColumnsBlock, GridBlock, HeadingBlock, ParagraphBlock
from block_cms.core import (
    BlockModelError, StructuralViolation, delete_by_id, find_by_id, insert_block, reorder,
    set_column, update_by_id, update_fields,
)


def _doc(*ids):
    return [ParagraphBlock(id=i, content=str(i)) for i in ids]


def _ids(seq):
    return [b.id for b in seq]


# ── update_by_id ──────────────────────────────────────────────────────────────

class TestUpdateById:
    def test_replaces_in_place(self):
        doc = _doc("a", "b", "c")
        new = ParagraphBlock(id="b", content="B!")
        out = update_by_id(doc, "b", new)
        assert _ids(out) == ["a", "b", "c"]
        assert out[1].content == "B!"

    def test_absent_id_is_noop(self):
        doc = _doc("a", "b")
        assert update_by_id(doc, "zz", ParagraphBlock(id="zz")) == doc

    def test_input_not_mutated(self):
        doc = _doc("a", "b")
        update_by_id(doc, "a", ParagraphBlock(id="a", content="changed"))
        assert doc[0].content == "a"

    def test_type_change_rejected(self):
        doc = _doc("a")
        out = update_by_id(doc, "a", HeadingBlock(id="a", content="H"))
        assert isinstance(out[0], ParagraphBlock)
        assert out[0].content == "a"

    def test_id_change_rejected(self):
        doc = _doc("a", "b")
        out = update_by_id(doc, "a", ParagraphBlock(id="b", content="dup"))
        assert out == doc

    def test_columns_copy_revalidated(self):
        # model_copy ne valide pas : le nombre de colonnes est recalé au remplacement
        cols = ColumnsBlock(id="c", children=[_doc("a"), []])
        stale = cols.model_copy(update={"column_count": 4})
        out = update_by_id([cols], "c", stale)
        assert out[0].column_count == 4
        assert len(out[0].children) == 4
        assert _ids(out[0].children[0]) == ["a"]

    def test_invalid_copy_rejected(self):
        doc = [HeadingBlock(id="h")]
        with pytest.raises(ValidationError):
            update_by_id(doc, "h", doc[0].model_copy(update={"level": 9}))


# ── delete_by_id ──────────────────────────────────────────────────────────────

class TestDeleteById:
    def test_removes(self):
        assert _ids(delete_by_id(_doc("a", "b", "c"), "b")) == ["a", "c"]

    def test_absent_is_noop(self):
        doc = _doc("a")
        assert delete_by_id(doc, "x") == doc

    def test_input_not_mutated(self):
        doc = _doc("a", "b")
        delete_by_id(doc, "a")
        assert _ids(doc) == ["a", "b"]


# ── reorder ───────────────────────────────────────────────────────────────────

class TestReorder:
    def test_move_last_to_first(self):
        assert _ids(reorder(_doc("a", "b", "c"), "c", "a")) == ["c", "a", "b"]

    def test_move_first_to_last(self):
        assert _ids(reorder(_doc("a", "b", "c"), "a", "c")) == ["b", "c", "a"]

    def test_move_to_middle(self):
        assert _ids(reorder(_doc("a", "b", "c", "d"), "d", "b")) == ["a", "d", "b", "c"]

    def test_same_id_is_noop(self):
        assert _ids(reorder(_doc("a", "b"), "a", "a")) == ["a", "b"]

    def test_both_absent_is_noop(self):
        assert _ids(reorder(_doc("a", "b"), "x", "y")) == ["a", "b"]

    def test_is_permutation(self):
        ids = ["a", "b", "c", "d", "e"]
        doc = _doc(*ids)
        for moved, target in itertools.product(ids, ids):
            out = reorder(doc, moved, target)
            assert len(out) == len(doc)
            assert sorted(_ids(out)) == sorted(ids)

    def test_input_not_mutated(self):
        doc = _doc("a", "b", "c")
        reorder(doc, "c", "a")
        assert _ids(doc) == ["a", "b", "c"]

    def test_cross_container_rejected(self):
        cols = ColumnsBlock(id="cols", children=[_doc("a", "b"), _doc("c")])
        left = cols.children[0]
        assert _ids(reorder(left, "c", "a")) == ["a", "b"]
        assert _ids(reorder(left, "a", "c")) == ["a", "b"]

    def test_cross_container_strict_raises(self):
        with pytest.raises(StructuralViolation):
            reorder(_doc("a", "b"), "a", "elsewhere", strict=True)

    def test_strict_absent_both_is_still_noop(self):
        assert _ids(reorder(_doc("a"), "x", "y", strict=True)) == ["a"]


# ── insert_block ──────────────────────────────────────────────────────────────

class TestInsertBlock:
    def test_append(self):
        assert _ids(insert_block(_doc("a"), ParagraphBlock(id="b"))) == ["a", "b"]

    def test_insert_at_index(self):
        assert _ids(insert_block(_doc("a", "c"), ParagraphBlock(id="b"), 1)) == ["a", "b", "c"]

    def test_duplicate_id_ignored(self):
        assert _ids(insert_block(_doc("a"), HeadingBlock(id="a"))) == ["a"]

    def test_id_taken_elsewhere_in_document_ignored(self):
        cols = ColumnsBlock(id="cols", children=[_doc("x"), []])
        doc = [cols]
        out = insert_block(cols.children[1], ParagraphBlock(id="x"), document=doc)
        assert out == []

    def test_free_id_inserted_in_column(self):
        cols = ColumnsBlock(id="cols", children=[_doc("x"), []])
        out = insert_block(cols.children[1], ParagraphBlock(id="y"), document=[cols])
        assert _ids(out) == ["y"]

    def test_nested_id_clash_ignored(self):
        grid = GridBlock(id="g", children=_doc("a"))
        assert _ids(insert_block(_doc("a"), grid)) == ["a"]

    def test_block_with_internal_duplicates_ignored(self):
        grid = GridBlock(id="g", children=_doc("p", "p"))
        assert insert_block([], grid) == []


# ── update_fields ─────────────────────────────────────────────────────────────

class TestUpdateFields:
    def test_simple_field(self):
        h = update_fields(HeadingBlock(id=1), level=1, content="Titre")
        assert (h.level, h.content) == (1, "Titre")

    def test_original_unchanged(self):
        h = HeadingBlock(id=1, content="avant")
        update_fields(h, content="après")
        assert h.content == "avant"

    def test_column_count_grow_preserves_content(self):
        cols = ColumnsBlock(id=1, children=[_doc("a"), _doc("b")])
        out = update_fields(cols, columnCount=4)
        assert out.column_count == 4
        assert [_ids(c) for c in out.children] == [["a"], ["b"], [], []]

    def test_column_count_shrink_truncates(self):
        cols = ColumnsBlock(id=1, columnCount=3, children=[_doc("a"), _doc("b"), _doc("c")])
        out = update_fields(cols, column_count=2)
        assert [_ids(c) for c in out.children] == [["a"], ["b"]]

    def test_legacy_key_columns(self):
        out = update_fields(ColumnsBlock(id=1), columns=3)
        assert out.column_count == 3
        assert len(out.children) == 3

    def test_arity_invariant_over_changes(self):
        cols = ColumnsBlock(id=1, children=[_doc("keep"), []])
        for n in [3, 1, 4, 2, 2, 5]:
            cols = update_fields(cols, columnCount=n)
            assert len(cols.children) == cols.column_count == n
            assert _ids(cols.children[0]) == ["keep"]

    def test_grid_shape_keeps_children(self):
        grid = GridBlock(id=1, children=_doc("a", "b"))
        out = update_fields(grid, columns=5, gap=0)
        assert (out.columns, out.gap) == (5, 0)
        assert _ids(out.children) == ["a", "b"]

    def test_grid_legacy_key_cols(self):
        assert update_fields(GridBlock(id=1), cols=2).columns == 2

    def test_size_change(self):
        assert update_fields(GridBlock(id=1), size="small").size == "small"

    def test_type_immutable(self):
        with pytest.raises(StructuralViolation):
            update_fields(ParagraphBlock(id=1), type="heading")

    def test_id_immutable(self):
        with pytest.raises(StructuralViolation):
            update_fields(ParagraphBlock(id=1), id=2)

    def test_unknown_field(self):
        with pytest.raises(BlockModelError):
            update_fields(ParagraphBlock(id=1), level=3)

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            update_fields(HeadingBlock(id=1), level=9)


# ── set_column ────────────────────────────────────────────────────────────────

def test_columns_assignment_keeps_arity():
    cols = ColumnsBlock(id=1, children=[_doc("a"), _doc("b")])
    cols.column_count = 5
    assert len(cols.children) == 5
    assert _ids(cols.children[1]) == ["b"]
    cols.column_count = 1
    assert [_ids(c) for c in cols.children] == [["a"]]


def test_columns_assignment_invalid_count():
    cols = ColumnsBlock(id=1)
    with pytest.raises(ValidationError):
        cols.column_count = 0


class TestSetColumn:
    def test_replace_column(self):
        cols = ColumnsBlock(id=1, children=[_doc("a"), []])
        out = set_column(cols, 1, _doc("b", "c"))
        assert [_ids(c) for c in out.children] == [["a"], ["b", "c"]]
        assert cols.children[1] == []

    def test_out_of_range(self):
        with pytest.raises(StructuralViolation):
            set_column(ColumnsBlock(id=1), 2, [])


# ── Édition imbriquée (l'appelant descend niveau par niveau) ──────────────────

def test_nested_edit_grid_inside_columns():
    grid = GridBlock(id="g", children=_doc("p1", "p2"))
    cols = ColumnsBlock(id="cols", children=[[HeadingBlock(id="h", content="T")], [grid]])
    doc = [cols]

    # niveau 3 : enfants de la grille
    new_children = update_by_id(grid.children, "p2", ParagraphBlock(id="p2", content="modifié"))
    new_children = reorder(new_children, "p2", "p1")
    # niveau 2 : colonne 1
    new_grid = update_fields(grid, children=new_children)
    new_column = update_by_id(cols.children[1], "g", new_grid)
    # niveau 1 : document
    new_doc = update_by_id(doc, "cols", set_column(cols, 1, new_column))

    assert find_by_id(new_doc, "p2").content == "modifié"
    assert _ids(find_by_id(new_doc, "g").children) == ["p2", "p1"]
    assert find_by_id(doc, "p2").content == "p2"
