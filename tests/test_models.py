"""Tests for response and resource models"""

import pytest

from analytix.domain.models.profile import Profile
from analytix.domain.models.project import Project
from analytix.domain.models.response import RestResponse


class TestRestResponse:
    """Tests for RestResponse.build"""

    def test_build_decodes_json(self):
        r = RestResponse.build(200, "/gdc/x", {"Content-Type": "application/json"}, b'{"a": 1}')
        assert r.data == {"a": 1}
        assert r.processed

    def test_build_unprocessed_keeps_raw_body(self):
        r = RestResponse.build(202, "/gdc/x", {}, b'{"a": 1}', process=False)
        assert r.data is None
        assert r.text == '{"a": 1}'

    def test_build_plain_text(self):
        r = RestResponse.build(200, "/gdc/x", {"Content-Type": "text/plain"}, b"OK")
        assert r.data == "OK"

    def test_text_body_that_looks_like_json_stays_text(self):
        r = RestResponse.build(200, "/gdc/log", {"Content-Type": "text/plain"}, b"[INFO] done")
        assert r.data == "[INFO] done"

    def test_binary_body_kept_as_bytes(self):
        payload = b"\xff\xfePK\x03\x04"
        r = RestResponse.build(200, "/gdc/export", {"Content-Type": "application/octet-stream"}, payload)
        assert r.data == payload
        assert r.content == payload

    def test_body_without_content_type_is_not_parsed(self):
        r = RestResponse.build(200, "/gdc/x", {}, b"{not json")
        assert r.data == b"{not json"

    def test_content_type_header_lookup_is_case_insensitive(self):
        r = RestResponse.build(200, "/gdc/x", {"content-type": "application/json; charset=UTF-8"}, b'{"a": 1}')
        assert r.data == {"a": 1}

    def test_empty_body(self):
        r = RestResponse.build(204, "/gdc/x", {}, b"")
        assert r.data is None
        assert r.json() is None

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError):
            RestResponse.build(200, "/gdc/x", {"Content-Type": "application/json"}, b"{broken")


class TestResources:
    """Tests for Project and Profile"""

    def test_project_from_json(self):
        project = Project.from_json(
            {"project": {"meta": {"title": "Sales"}, "links": {"self": "/gdc/projects/abc"}}}
        )
        assert project.title == "Sales"
        assert project.pid == "abc"

    def test_profile_from_json(self):
        profile = Profile.from_json(
            {"accountSetting": {"login": "a@b.c", "links": {"self": "/gdc/account/profile/1"}}}
        )
        assert profile.login == "a@b.c"
        assert profile.uri == "/gdc/account/profile/1"
        assert profile.name == ""
