from jsonparams.parsing import JSON, MimeType, lookup_mime_type, split_content_type


def test_split_content_type_lowercases_and_reads_parameters() -> None:
    assert split_content_type('Application/JSON; Charset="UTF-8"; foo') == ("application/json", {"charset": "UTF-8"})


def test_split_content_type_handles_missing_header() -> None:
    assert split_content_type(None) == ("", {})
    assert split_content_type("") == ("", {})


def test_lookup_resolves_synonyms() -> None:
    assert lookup_mime_type("text/x-json") is JSON
    assert lookup_mime_type(" APPLICATION/JSONREQUEST ") is JSON
    assert lookup_mime_type("application/xml") == MimeType("application/xml")
    assert str(JSON) == "application/json"
