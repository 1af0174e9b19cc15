from serdedoc.model import Context, FieldUnit, FileUnit, StructUnit


def test_struct_unit_defaults_are_empty():
    unit = StructUnit("Point")
    assert unit.name == "Point"
    assert unit.fields == []
    assert unit.derive == []
    assert unit.doc is None


def test_defaults_are_not_shared():
    a = StructUnit("A")
    b = StructUnit("B")
    a.fields.append(FieldUnit("x", "i32"))
    assert b.fields == []
    f1, f2 = FileUnit(), FileUnit()
    f1.structs.append(a)
    assert f2.structs == []


def test_field_unit_holds_values():
    field = FieldUnit("x", "i32", " The x coordinate")
    assert (field.name, field.ty, field.doc) == ("x", "i32", " The x coordinate")


def test_iter_structs_flattens_in_order():
    ctx = Context()
    ctx.files.append(FileUnit(structs=[StructUnit("A"), StructUnit("B")]))
    ctx.files.append(FileUnit())
    ctx.files.append(FileUnit(structs=[StructUnit("C")]))
    assert [s.name for s in ctx.iter_structs()] == ["A", "B", "C"]


def test_iter_structs_empty_context():
    assert list(Context().iter_structs()) == []