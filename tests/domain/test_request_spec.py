# tests/domain/test_request_spec.py
import pytest

from domain.exceptions import EncodingError, InvalidMethodError, RequestBuilderError
from domain.payload import FieldRecord
from domain.request_format import RequestFormat
from domain.request_spec import HTTP_METHODS, RequestSpec, normalize_method


class TestRequestFormat:
    def test_transport_keys(self):
        assert RequestFormat.QUERY.transport_key == "query"
        assert RequestFormat.FORM_PARAMS.transport_key == "form_params"
        assert RequestFormat.JSON.transport_key == "json"
        assert RequestFormat.MULTIPART.transport_key == "multipart"

    def test_from_value(self):
        assert RequestFormat("multipart") is RequestFormat.MULTIPART

    def test_closed_set(self):
        with pytest.raises(ValueError):
            RequestFormat("xml")


class TestRequestSpec:
    def test_defaults(self):
        spec = RequestSpec()
        assert spec.uri == ""
        assert spec.body is None
        assert spec.format is RequestFormat.QUERY
        assert spec.debug is False

    def test_mutable(self):
        spec = RequestSpec()
        spec.debug = True
        spec.format = RequestFormat.JSON
        assert (spec.debug, spec.format) == (True, RequestFormat.JSON)


class TestNormalizeMethod:
    @pytest.mark.parametrize("method", ["get", "POST", "Put", "pAtCh", "delete"])
    def test_accepted(self, method):
        assert normalize_method(method) == method.upper()
        assert normalize_method(method) in HTTP_METHODS

    @pytest.mark.parametrize("method", ["trace", "HEAD", "options", "", None])
    def test_rejected(self, method):
        assert normalize_method(method) is None


class TestFieldRecord:
    def test_scalar_record(self):
        record = FieldRecord(name="a[b]", contents="v")
        assert record.filename is None
        assert record.mime_type is None
        assert record.is_file is False

    def test_file_record(self):
        record = FieldRecord(name="f", contents=b"x", filename="x.txt", mime_type="text/plain")
        assert record.is_file is True

    def test_frozen(self):
        record = FieldRecord(name="a", contents=1)
        with pytest.raises(Exception):  # FrozenInstanceError
            record.name = "b"


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(InvalidMethodError, RequestBuilderError)
        assert issubclass(InvalidMethodError, ValueError)
        assert issubclass(EncodingError, RequestBuilderError)
        assert not issubclass(EncodingError, ValueError)
