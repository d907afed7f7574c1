"""Tests for response classification and typed decoding."""

import json

import pytest
from pydantic import BaseModel

from triton_cloudapi.cloudapi import decoding, normalization, types
from triton_cloudapi.cloudapi.errors import DecodeError


class NameOnly(BaseModel):
    """One-field record used to check classification in isolation."""

    name: str | None = None


def _raw(status_code: int, body: str | bytes = b"") -> decoding.RawResponse:
    return decoding.RawResponse(status_code=status_code, body=body)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def test_204_with_empty_body_is_empty_success():
    """204 without a body decodes to Success(None)."""
    assert decoding.classify_and_decode(_raw(204), NameOnly) == decoding.Success(None)


def test_200_decodes_into_shape():
    """200 with a JSON object decodes into the requested record."""
    result = decoding.classify_and_decode(_raw(200, '{"name":"x"}'), NameOnly)
    assert result == decoding.Success(NameOnly(name="x"))


def test_200_without_shape_returns_plain_json():
    """Untyped success returns the normalized JSON value."""
    result = decoding.classify(_raw(200, '{"us-east-1":"https://us-east-1.api.test","created":1}'))
    assert result == decoding.Success({"us-east-1": "https://us-east-1.api.test", "created_at": 1})


def test_409_is_server_error():
    """Non-success status yields a ServerError with code and message."""
    result = decoding.classify_and_decode(
        _raw(409, '{"code":"InvalidArgument","message":"bad"}'),
        NameOnly,
    )
    assert isinstance(result, decoding.ServerError)
    assert result.status_code == 409
    assert result.code == "InvalidArgument"
    assert result.message == "bad"


def test_server_error_keeps_extra_fields():
    """Error payloads are not forced into a fixed schema."""
    body = {"code": "ResourceNotFound", "message": "gone", "request_id": "abc"}
    result = decoding.classify_and_decode(_raw(404, json.dumps(body)))
    assert result == decoding.ServerError(status_code=404, body=body)


def test_server_error_with_empty_body():
    """Empty error bodies give an empty mapping."""
    result = decoding.classify_and_decode(_raw(503))
    assert result == decoding.ServerError(status_code=503, body={})
    assert result.code is None
    assert result.message is None


def test_server_error_non_object_body_raises():
    """An error body that is not a JSON object cannot be classified."""
    with pytest.raises(DecodeError):
        decoding.classify_and_decode(_raw(500, '["boom"]'))


def test_server_error_non_json_body_raises():
    """An HTML error page surfaces as DecodeError with the raw text."""
    with pytest.raises(DecodeError) as excinfo:
        decoding.classify_and_decode(_raw(502, "<html>Bad Gateway</html>"))
    assert excinfo.value.raw == "<html>Bad Gateway</html>"


def test_success_with_invalid_json_raises():
    """Unparseable success body is a DecodeError, not a ServerError."""
    with pytest.raises(DecodeError) as excinfo:
        decoding.classify_and_decode(_raw(200, "{not json"), NameOnly)
    assert excinfo.value.raw == "{not json"


def test_invalid_utf8_raises():
    """Bodies that are not UTF-8 raise DecodeError."""
    with pytest.raises(DecodeError):
        decoding.classify_and_decode(_raw(200, b"\xff\xfe\xfa"), NameOnly)


def test_bytes_and_text_bodies_decode_the_same():
    """RawResponse accepts both bytes and str bodies."""
    as_bytes = decoding.classify_and_decode(_raw(200, b'{"name":"x"}'), NameOnly)
    as_text = decoding.classify_and_decode(_raw(200, '{"name":"x"}'), NameOnly)
    assert as_bytes == as_text


# ---------------------------------------------------------------------------
# Typed decoding
# ---------------------------------------------------------------------------


def test_account_aliases_decode():
    """camelCase wire names land in snake_case fields."""
    result = decoding.classify_and_decode(
        _raw(200, '{"firstName":"Ann","lastName":"Lee"}'),
        types.Account,
    )
    assert result.value.first_name == "Ann"
    assert result.value.last_name == "Lee"


def test_created_decodes_into_created_at():
    """Legacy "created" fills created_at."""
    result = decoding.classify_and_decode(
        _raw(200, '{"created":"2020-01-01T00:00:00Z"}'),
        types.Volume,
    )
    assert result.value.created_at == "2020-01-01T00:00:00Z"


def test_list_preserves_order():
    """List responses decode to records in input order."""
    result = decoding.classify_and_decode(
        _raw(200, '[{"name":"a"},{"name":"b"}]'),
        list[types.Machine],
    )
    assert [machine.name for machine in result.value] == ["a", "b"]


def test_missing_fields_decode_to_none():
    """Absent fields are None, never an error."""
    machine = decoding.decode("{}", types.Machine)
    assert machine == types.Machine()
    assert machine.primary_ip is None
    assert machine.disks is None


def test_unknown_fields_are_ignored():
    """Fields the model does not declare are dropped silently."""
    key = decoding.decode('{"name":"k","brand_new_field":true}', types.Key)
    assert key == types.Key(name="k")


def test_machine_primary_ip_and_timestamps():
    """Machine decodes aliased IP and timestamps alongside nested disks."""
    body = json.dumps(
        {
            "id": "b6979942-7d5d-4fe6-a2ec-b812e950625a",
            "name": "web01",
            "memory": 1024,
            "primaryIp": "165.225.138.124",
            "created": "2020-01-01T00:00:00Z",
            "updated": "2020-01-02T00:00:00Z",
            "disks": [{"id": "d1", "boot": True, "size": 10240}],
            "metadata": {"root_authorized_keys": "ssh-rsa AAAA"},
        }
    )
    result = decoding.classify_and_decode(_raw(200, body), types.Machine)
    machine = result.value
    assert machine.primary_ip == "165.225.138.124"
    assert machine.created_at == "2020-01-01T00:00:00Z"
    assert machine.updated_at == "2020-01-02T00:00:00Z"
    assert machine.disks == [types.MachineDisk(id="d1", boot=True, size=10240)]
    assert machine.metadata == {"root_authorized_keys": "ssh-rsa AAAA"}


def test_image_with_requirements_and_files():
    """Images decode their embedded record and embedded list."""
    body = json.dumps(
        {
            "id": "2b683a82-a066-11e3-97ab-2faa44701c5a",
            "name": "base",
            "requirements": {"min_ram": 512},
            "files": [{"compression": "gzip", "sha1": "abc", "size": 110742036}],
        }
    )
    image = decoding.decode(body, types.Image)
    assert image.requirements == types.ImageRequirements(min_ram=512)
    assert image.requirements.max_ram is None
    assert image.files == [types.ImageFile(compression="gzip", sha1="abc", size=110742036)]


def test_role_with_policies_and_members():
    """Roles decode nested policy and member lists."""
    body = json.dumps(
        {
            "name": "devs",
            "policies": [{"name": "readonly"}],
            "members": [{"type": "subuser", "login": "bob", "default": True}],
        }
    )
    role = decoding.decode(body, types.Role)
    assert role.policies == [types.RolePolicy(name="readonly")]
    assert role.members == [types.RoleMember(type="subuser", login="bob", default=True)]


def test_migration_timestamps_are_renamed():
    """Migration *_timestamp fields map to *_at."""
    body = '{"machine":"m1","created_timestamp":"t1","scheduled_timestamp":"t2"}'
    migration = decoding.decode(normalization.normalize(body), types.Migration)
    assert migration.created_at == "t1"
    assert migration.scheduled_at == "t2"


def test_firewall_rule_global_alias():
    """The reserved word "global" maps to the global_ field."""
    rule = decoding.decode('{"id":"r1","global":true,"enabled":false}', types.FirewallRule)
    assert rule.global_ is True
    assert rule.enabled is False


def test_round_trip_populated_record():
    """A fully populated record survives encode then decode."""
    volume = types.Volume(
        id="v1",
        owner_uuid="o1",
        name="data",
        type="tritonnfs",
        size=10240,
        created_at="2020-01-01T00:00:00Z",
        state="ready",
        filesystem_path="/exports/data",
        networks=["n1"],
        refs=["m1"],
    )
    assert decoding.decode(json.dumps(volume.to_body()), types.Volume) == volume


# ---------------------------------------------------------------------------
# Shape mismatches
# ---------------------------------------------------------------------------


def test_no_string_to_number_coercion():
    """A wire string is not parsed into an integer field."""
    with pytest.raises(DecodeError) as excinfo:
        decoding.decode('{"memory":"1024"}', types.Machine)
    assert excinfo.value.raw == '{"memory":"1024"}'


def test_no_int_to_bool_coercion():
    """0/1 are not accepted for boolean fields."""
    with pytest.raises(DecodeError):
        decoding.decode('{"docker":1}', types.Machine)


def test_object_where_list_expected_raises():
    """A single object cannot decode as a list shape."""
    with pytest.raises(DecodeError):
        decoding.decode('{"name":"a"}', list[types.Machine])


def test_decode_empty_text_is_none():
    """Empty text decodes to None."""
    assert decoding.decode("", types.Machine) is None


def test_decode_accepts_parsed_object():
    """A dict from json.loads decodes the same way as its text."""
    tree = {"login": "jill", "firstName": "Jill", "created": "2020-01-01T00:00:00Z"}
    account = decoding.decode(tree, types.Account)
    assert account == decoding.decode(json.dumps(tree), types.Account)
    assert account.first_name == "Jill"
    assert account.created_at == "2020-01-01T00:00:00Z"


def test_decode_accepts_parsed_list():
    """A list tree decodes into a list shape without being re-parsed."""
    tree = [{"name": "a"}, {"name": "b"}]
    keys = decoding.decode(tree, list[types.Key])
    assert [key.name for key in keys] == ["a", "b"]


def test_decode_tree_mismatch_keeps_raw_json():
    """A tree that does not fit the shape raises with its JSON text."""
    with pytest.raises(DecodeError) as excinfo:
        decoding.decode({"memory": "1024"}, types.Machine)
    assert json.loads(excinfo.value.raw) == {"memory": "1024"}


def test_round_trip_nested_image():
    """An image with embedded requirements and files survives encode then decode."""
    image = types.Image(
        id="2b683a82-a066-11e3-97ab-2faa44701c5a",
        name="base",
        version="13.4.0",
        public=True,
        acl=["a1"],
        requirements=types.ImageRequirements(min_ram=512, max_ram=8192, brand="joyent"),
        files=[types.ImageFile(compression="gzip", sha1="abc", size=110742036)],
    )
    assert decoding.decode(json.dumps(image.to_body()), types.Image) == image


def test_round_trip_nested_role():
    """A role with policy and member lists survives encode then decode."""
    role = types.Role(
        id="r1",
        name="devs",
        policies=[types.RolePolicy(id="p1", name="readonly")],
        members=[types.RoleMember(type="subuser", login="bob", default=True)],
    )
    assert decoding.decode(json.dumps(role.to_body()), types.Role) == role


ACCOUNT_FIELDS = {
    "id": "cc71f8bb-f310-4746-8e36-afd7c6dd2895",
    "login": "jill",
    "email": "jill@example.com",
    "firstName": "Jill",
    "lastName": "Doe",
    "companyName": "Acme",
    "created": "2020-01-01T00:00:00Z",
    "updated": "2020-02-01T00:00:00Z",
    "triton_cns_enabled": True,
}
CANONICAL_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "companyName": "company_name",
    "created": "created_at",
    "updated": "updated_at",
}


@pytest.mark.parametrize(
    "present",
    [
        (),
        ("login",),
        ("firstName", "lastName"),
        ("id", "companyName", "updated"),
        ("email", "created", "triton_cns_enabled"),
        tuple(ACCOUNT_FIELDS),
    ],
)
def test_partial_account_decodes_present_fields_only(present):
    """Present fields decode to their values and every other field is None."""
    body = json.dumps({name: ACCOUNT_FIELDS[name] for name in present})
    account = decoding.decode(body, types.Account)

    expected = {CANONICAL_NAMES.get(name, name): ACCOUNT_FIELDS[name] for name in present}
    dumped = account.model_dump()
    for field_name, value in dumped.items():
        assert value == expected.get(field_name)
