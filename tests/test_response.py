import json

from xlive.response import ApiError, UnifiedResponse, fail, success


def test_success_default_message():
    resp = success({"id": 1})
    assert resp.success is True
    assert resp.code == 0
    assert resp.message == "操作成功"
    assert resp.data == {"id": 1}
    assert resp.details is None


def test_success_custom_message():
    resp = success([1, 2], "done")
    assert resp.message == "done"
    assert resp.data == [1, 2]


def test_success_to_dict_keeps_null_data():
    d = success(None).to_dict()
    assert "data" in d
    assert d["data"] is None
    assert "details" not in d
    assert "trace_id" not in d


def test_fail_without_details():
    resp = fail(400, "bad request")
    assert resp.success is False
    assert resp.code == 400
    assert resp.message == "bad request"
    assert resp.data is None
    assert resp.details is None
    assert "details" not in resp.to_dict()


def test_fail_with_details():
    resp = fail(422, "invalid", {"field": "name"})
    assert resp.details == {"field": "name"}
    assert resp.to_dict()["details"] == {"field": "name"}


def test_fail_with_none_details_is_omitted():
    resp = fail(500, "oops", None)
    assert resp.details is None
    assert "details" not in resp.to_dict()


def test_fail_with_empty_list_details_is_omitted():
    resp = fail(500, "oops", [])
    assert resp.details is None


def test_fail_with_non_empty_list_details():
    resp = fail(500, "oops", ["a"])
    assert resp.details == ["a"]


def test_fail_uses_only_first_detail():
    resp = fail(500, "oops", "first", "second")
    assert resp.details == "first"


def test_trace_id_included_when_set():
    resp = UnifiedResponse(success=True, code=0, message="m", trace_id="abc")
    assert resp.to_dict()["trace_id"] == "abc"


def test_to_dict_is_json_serialisable_round_trip():
    resp = fail(404, "missing", {"k": "v"})
    loaded = json.loads(json.dumps(resp.to_dict()))
    assert loaded == resp.to_dict()


def test_api_error_to_dict():
    err = ApiError(code=7, message="boom")
    assert err.to_dict() == {"code": 7, "message": "boom"}
    err.details = {"x": 1}
    assert err.to_dict()["details"] == {"x": 1}