import pytest

from idnpatch.operations import (
    PatchOperation,
    PatchValue,
    V3PatchOperation,
    V3PatchValue,
    convert_to_v3,
)


def test_convert_from_beta_to_v3():
    beta = [
        PatchOperation("add", "/attrString", PatchValue(string="newValue")),
        PatchOperation("replace", "/attrBool", PatchValue(boolean=True)),
        PatchOperation("replace", "/attrInt", PatchValue(int32=222)),
        PatchOperation("replace", "/attrArray", PatchValue(array=["TEST"])),
        PatchOperation("add", "/attrMap", PatchValue(mapping={"id": "newId"})),
    ]
    expected = [
        V3PatchOperation("add", "/attrString", V3PatchValue(string="newValue")),
        V3PatchOperation("replace", "/attrBool", V3PatchValue(boolean=True)),
        V3PatchOperation("replace", "/attrInt", V3PatchValue(int32=222)),
        V3PatchOperation("replace", "/attrArray", V3PatchValue(array=["TEST"])),
        V3PatchOperation("add", "/attrMap", V3PatchValue(mapping={"id": "newId"})),
    ]
    assert convert_to_v3(beta) == expected


def test_convert_keeps_missing_value():
    result = convert_to_v3([PatchOperation("remove", "/name")])
    assert result == [V3PatchOperation("remove", "/name", None)]


def test_convert_empty_list():
    assert convert_to_v3([]) == []


def test_convert_copies_array():
    items = [{"action": "ENABLE"}]
    result = convert_to_v3([PatchOperation("replace", "/accountActions", PatchValue(array=items))])
    items[0]["action"] = "DISABLE"
    assert result[0].value.array == [{"action": "ENABLE"}]


def test_convert_rejects_unserialisable_array():
    with pytest.raises(ValueError):
        convert_to_v3([PatchOperation("replace", "/x", PatchValue(array=[object()]))])


def test_beta_and_v3_values_differ_by_flavour():
    assert PatchValue(string="a") != V3PatchValue(string="a")
    assert V3PatchValue(string="a") == V3PatchValue(string="a")


def test_to_dict_without_value():
    assert PatchOperation("remove", "/name").to_dict() == {"op": "remove", "path": "/name"}


def test_to_dict_with_value():
    operation = V3PatchOperation("replace", "/features", V3PatchValue(array=["AUTHENTICATE"]))
    assert operation.to_dict() == {
        "op": "replace",
        "path": "/features",
        "value": ["AUTHENTICATE"],
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        (PatchValue(string="UTC"), "UTC"),
        (PatchValue(int32=99), 99),
        (PatchValue(boolean=False), False),
        (PatchValue(mapping={"id": "newOwner"}), {"id": "newOwner"}),
        (PatchValue(), None),
    ],
)
def test_value_to_json(value, expected):
    assert value.to_json() == expected