"""Tests for descriptor resolution and rewriting."""

from __future__ import annotations

import json
import logging

import pytest

from minicomp.components.descriptor import rewrite_descriptor
from minicomp.models import FileRecord, ResolvedModule


class RecordingAnalyser:
    def __init__(self) -> None:
        self.analysed = []

    def analyse(self, script: FileRecord) -> None:
        self.analysed.append(script)


class RecordingLogger:
    def __init__(self) -> None:
        self.errors = []

    def error(self, message, *args) -> None:
        self.errors.append(message % args)

    def warning(self, message, *args) -> None:  # pragma: no cover - unused
        pass

    def debug(self, message, *args) -> None:
        pass


def _record(path: str, content: bytes | None = None) -> FileRecord:
    directory, _, name = path.rpartition("/")
    return FileRecord(
        full_path=path,
        directory=directory,
        extension=name.rsplit(".", 1)[-1],
        content=content,
    )


def _descriptor(payload: bytes, script: FileRecord | None) -> FileRecord:
    descriptor = _record("/app/src/btn.json", payload)
    descriptor.is_json = True
    descriptor.component = script
    return descriptor


def _resolver(mapping):
    def resolve(script: FileRecord, reference: str):
        resolved = mapping.get(reference)
        if resolved is not None:
            script.resolved_module_ids[reference] = resolved
            return resolved.identifier
        return None

    return resolve


def test_pass_through_without_using_components() -> None:
    payload = b'{"component": true,\n  "styleIsolation": "shared"}'
    script = _record("/app/src/btn.js")

    result = rewrite_descriptor(
        _descriptor(payload, script),
        resolve=_resolver({}),
        analyser=RecordingAnalyser(),
    )

    assert result.content is payload


def test_pass_through_without_component_script() -> None:
    payload = b'{"usingComponents": {"icon": "./icon"}}'

    result = rewrite_descriptor(
        _descriptor(payload, None),
        resolve=_resolver({}),
        analyser=RecordingAnalyser(),
    )

    assert result.content is payload


def test_rewrites_usages_with_hyphenated_keys() -> None:
    script = _record("/app/src/btn.js")
    icon = _record("/app/comp/icon.js")
    payload = json.dumps(
        {
            "component": True,
            "usingComponents": {
                "myButton": "./my-button",
                "icon": "../comp/icon",
                "empty": "",
                "missing": None,
            },
        }
    ).encode("utf-8")
    analyser = RecordingAnalyser()

    result = rewrite_descriptor(
        _descriptor(payload, script),
        resolve=_resolver({"../comp/icon": ResolvedModule("../comp/icon-resolved", icon)}),
        analyser=analyser,
    )

    data = json.loads(result.content)
    assert data["component"] is True
    assert data["usingComponents"] == {
        "my-button": "./my-button",
        "icon": "../comp/icon-resolved",
    }
    assert list(data) == ["component", "usingComponents"]
    assert analyser.analysed == [icon]


def test_output_uses_four_space_indent() -> None:
    script = _record("/app/src/btn.js")
    payload = b'{"usingComponents":{"icon":"./icon"}}'

    result = rewrite_descriptor(
        _descriptor(payload, script),
        resolve=_resolver({"./icon": ResolvedModule("./icon", None)}),
        analyser=RecordingAnalyser(),
    )

    assert result.content == '{\n    "usingComponents": {\n        "icon": "./icon"\n    }\n}'


def test_malformed_json_logs_once_and_returns_original() -> None:
    payload = b'{"usingComponents": {'
    logger = RecordingLogger()

    result = rewrite_descriptor(
        _descriptor(payload, _record("/app/src/btn.js")),
        resolve=_resolver({}),
        analyser=RecordingAnalyser(),
        logger=logger,
    )

    assert result.content is payload
    assert len(logger.errors) == 1
    assert "/app/src/btn.json" in logger.errors[0]


def test_malformed_json_uses_module_logger_by_default(caplog) -> None:
    payload = b"not json"

    with caplog.at_level(logging.ERROR, logger="minicomp"):
        result = rewrite_descriptor(
            _descriptor(payload, _record("/app/src/btn.js")),
            resolve=_resolver({}),
            analyser=RecordingAnalyser(),
        )

    assert result.content is payload
    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(errors) == 1


def test_resolver_errors_propagate() -> None:
    def failing_resolve(script, reference):
        raise LookupError(reference)

    payload = b'{"usingComponents": {"icon": "./icon"}}'
    descriptor = _descriptor(payload, _record("/app/src/btn.js"))

    with pytest.raises(LookupError):
        rewrite_descriptor(descriptor, resolve=failing_resolve, analyser=RecordingAnalyser())


def test_non_string_references_are_dropped_with_a_warning(caplog) -> None:
    script = _record("/app/src/btn.js")
    payload = json.dumps(
        {
            "usingComponents": {
                "icon": ["../comp/icon"],
                "card": {"path": "./card"},
                "tab": "./tab",
            }
        }
    ).encode("utf-8")
    seen = []

    def resolve(script: FileRecord, reference: str):
        seen.append(reference)
        return None

    with caplog.at_level(logging.WARNING, logger="minicomp"):
        result = rewrite_descriptor(
            _descriptor(payload, script), resolve=resolve, analyser=RecordingAnalyser()
        )

    assert json.loads(result.content) == {"usingComponents": {"tab": "./tab"}}
    assert seen == ["./tab"]
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 2
