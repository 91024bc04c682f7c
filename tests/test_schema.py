from gptscript.schema import object_schema


def test_object_schema_type():
    assert object_schema()["type"] == "object"
    assert object_schema()["properties"] == {}


def test_object_schema_properties():
    schema = object_schema("arg1", "desc1", "arg2", "desc2")
    assert list(schema["properties"]) == ["arg1", "arg2"]
    assert schema["properties"]["arg1"]["description"] == "desc1"
    assert schema["properties"]["arg2"]["type"] == "string"


def test_object_schema_ignores_dangling_name():
    schema = object_schema("arg1", "desc1", "orphan")
    assert list(schema["properties"]) == ["arg1"]