import json
from typing import Any, List

import pytest

from codeseg.chunking import ChunkAssembler, chunk
from codeseg.extraction import Extraction, StaticExtractor
from codeseg.models import ClassInfo, FunctionInfo, ImportInfo
from codeseg.settings import ChunkerSettings

SAMPLE = "\n".join(
    [
        'import { a } from "./a";',
        "",
        "class Calculator {",
        "  add(a, b) {",
        "    return a + b;",
        "  }",
        "}",
        "",
        "// adds one",
        "function inc(x) {",
        "  return x + 1;",
        "}",
    ]
)


def _sample_extractor() -> StaticExtractor:
    add = FunctionInfo("add", 4, 6)
    return StaticExtractor(
        functions=[add, FunctionInfo("inc", 10, 12)],
        classes=[ClassInfo("Calculator", 3, 7, methods=[add])],
        imports=[ImportInfo('import { a } from "./a";', 1, "./a")],
    )


def _assembler(extractor: Any, **overrides: Any) -> ChunkAssembler:
    return ChunkAssembler(extractor=extractor, settings=ChunkerSettings(**overrides))


def _filler_lines(count: int) -> List[str]:
    return [f"const value_{i} = compute({i}, 'filler');" for i in range(count)]


def test_single_line_function() -> None:
    source = "export function greet(name) { return name; }"
    extractor = StaticExtractor(functions=[FunctionInfo("greet", 1, 1)])
    chunks = chunk(None, source, "typescript", extractor=extractor)
    assert len(chunks) == 1
    assert chunks[0].start_line == chunks[0].end_line == 1
    assert len(chunks[0].functions) == 1
    assert chunks[0].text == source


def test_empty_source_yields_no_chunks() -> None:
    extractor = StaticExtractor(functions=[FunctionInfo("ghost", 1, 3)])
    assert chunk(None, "", "typescript", extractor=extractor) == []


def test_class_chunk_spans_exact_class_range() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    class_chunks = [c for c in chunks if c.classes]
    assert len(class_chunks) == 1
    class_chunk = class_chunks[0]
    assert (class_chunk.start_line, class_chunk.end_line) == (3, 7)
    assert class_chunk.classes[0].name == "Calculator"
    assert [f.name for f in class_chunk.functions] == ["add"]
    assert class_chunk.text.startswith("class Calculator {")


def test_methods_do_not_get_standalone_chunks() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    standalone = [c for c in chunks if c.functions and not c.classes]
    assert [c.functions[0].name for c in standalone] == ["inc"]


def test_function_chunk_attaches_leading_context() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    inc = next(c for c in chunks if c.functions and c.functions[0].name == "inc")
    assert (inc.start_line, inc.end_line) == (8, 12)
    assert inc.text.split("\n")[:2] == ["", "// adds one"]


def test_emission_order_and_short_runs_dropped() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    assert len(chunks) == 2
    assert chunks[0].classes and not chunks[1].classes


def test_every_chunk_carries_file_imports() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    for item in chunks:
        assert [imp.module for imp in item.imports] == ["./a"]


def test_chunks_do_not_share_descriptors() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    chunks[0].imports[0].statement = "mutated"
    assert chunks[1].imports[0].statement == 'import { a } from "./a";'


def test_chunk_text_matches_line_range() -> None:
    lines = SAMPLE.split("\n")
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    for item in chunks:
        assert item.text == "\n".join(lines[item.start_line - 1 : item.end_line])
        assert item.start_line <= item.end_line


def test_structural_chunks_do_not_overlap() -> None:
    extractor = StaticExtractor(
        functions=[
            FunctionInfo("a", 1, 3),
            FunctionInfo("b", 5, 7),
            FunctionInfo("method", 11, 12),
        ],
        classes=[ClassInfo("K", 9, 14)],
    )
    source = "\n".join(f"line {i}" for i in range(1, 15))
    chunks = _assembler(extractor).chunk(None, source, "typescript")
    spans = sorted((c.start_line, c.end_line) for c in chunks if c.functions or c.classes)
    assert spans == [(1, 3), (5, 7), (9, 14)]
    for (_, prev_end), (next_start, _) in zip(spans, spans[1:]):
        assert prev_end < next_start


def test_filler_only_when_no_structure() -> None:
    source = "\n".join(_filler_lines(12))
    chunks = _assembler(StaticExtractor()).chunk(None, source, "typescript")
    assert len(chunks) == 1
    filler = chunks[0]
    assert (filler.start_line, filler.end_line) == (1, 12)
    assert filler.functions == [] and filler.classes == []


def test_filler_windows_respect_max_lines() -> None:
    source = "\n".join(_filler_lines(450))
    chunks = _assembler(StaticExtractor()).chunk(None, source, "python")
    assert [(c.start_line, c.end_line) for c in chunks] == [
        (1, 200),
        (201, 400),
        (401, 450),
    ]


def test_filler_drops_runs_below_min_lines() -> None:
    source = "\n".join(_filler_lines(4))
    assert _assembler(StaticExtractor()).chunk(None, source, "typescript") == []


def test_filler_drops_whitespace_windows() -> None:
    source = "\n" * 8
    assert _assembler(StaticExtractor()).chunk(None, source, "typescript") == []


def test_filler_drops_windows_below_min_chars() -> None:
    source = "\n".join(["x = 1"] * 5)
    assert _assembler(StaticExtractor()).chunk(None, source, "python") == []
    relaxed = _assembler(StaticExtractor(), min_chunk_chars=10)
    assert len(relaxed.chunk(None, source, "python")) == 1


def test_filler_scans_dependencies() -> None:
    source = "\n".join(["import os", "import sys", *_filler_lines(4)])
    chunks = _assembler(StaticExtractor()).chunk(None, source, "python")
    assert chunks[0].dependencies == ["import os", "import sys"]


def test_extractor_failure_degrades_to_filler() -> None:
    class BrokenExtractor:
        def extract(self, tree_root: Any, source_text: str, language_id: str) -> Extraction:
            raise RuntimeError("parse tree unusable")

    source = "\n".join(_filler_lines(6))
    chunks = _assembler(BrokenExtractor()).chunk(object(), source, "typescript")
    assert len(chunks) == 1
    assert chunks[0].functions == []


def test_unsupported_language_keeps_caller_id() -> None:
    source = "\n".join(_filler_lines(6))
    chunks = _assembler(StaticExtractor()).chunk(None, source, "cobol")
    assert chunks and all(c.language == "cobol" for c in chunks)


def test_descriptor_past_end_of_source_is_clamped() -> None:
    source = "function f() {\n  return 1;\n}"
    extractor = StaticExtractor(functions=[FunctionInfo("f", 1, 10)])
    chunks = _assembler(extractor).chunk(None, source, "typescript")
    assert len(chunks) == 1
    assert (chunks[0].start_line, chunks[0].end_line) == (1, 3)
    assert chunks[0].text == source


def test_chunk_ids_are_unique() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    assert len({c.id for c in chunks}) == len(chunks)


@pytest.mark.parametrize("lookback", [0, 1])
def test_context_lookback_is_configurable(lookback: int) -> None:
    chunks = _assembler(_sample_extractor(), context_lookback_lines=lookback).chunk(
        None, SAMPLE, "typescript"
    )
    inc = next(c for c in chunks if c.functions and c.functions[0].name == "inc")
    assert inc.start_line == 10 - lookback


def test_chunks_serialize_independently() -> None:
    chunks = _assembler(_sample_extractor()).chunk(None, SAMPLE, "typescript")
    payload = json.loads(json.dumps(chunks[0].to_dict()))
    assert payload["classes"][0]["name"] == "Calculator"
    assert payload["classes"][0]["methods"][0]["name"] == "add"
    assert payload["imports"][0]["module"] == "./a"


def test_cpp_function_does_not_absorb_preprocessor_lines() -> None:
    source = "\n".join(["#include <vector>", "#define N 3", "int main() {", "  return N;", "}"])
    extractor = StaticExtractor(functions=[FunctionInfo("main", 3, 5)])
    chunks = _assembler(extractor).chunk(None, source, "cpp")
    assert (chunks[0].start_line, chunks[0].end_line) == (3, 5)
    assert not chunks[0].text.startswith("#")


def test_python_function_keeps_hash_comment() -> None:
    source = "\n".join(["import os", "# Returns the home directory.", "def home():", "    return os.getcwd()"])
    extractor = StaticExtractor(functions=[FunctionInfo("home", 3, 4)])
    chunks = _assembler(extractor).chunk(None, source, "python")
    assert chunks[0].start_line == 2
    assert chunks[0].text.startswith("# Returns")
