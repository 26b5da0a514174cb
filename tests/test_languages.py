import pytest

from codeseg.languages import config_for, is_supported, supported_languages


def test_supported_languages_order() -> None:
    assert supported_languages() == [
        "typescript",
        "javascript",
        "python",
        "rust",
        "go",
        "java",
        "cpp",
    ]


@pytest.mark.parametrize("language", ["typescript", "python", "rust", "go", "java", "cpp"])
def test_supported_languages_resolve(language: str) -> None:
    assert is_supported(language)
    assert config_for(language).name == language


def test_unknown_language_falls_back_to_default() -> None:
    assert not is_supported("cobol")
    config = config_for("cobol")
    assert config == config_for("typescript")


def test_lookup_is_case_sensitive() -> None:
    assert not is_supported("Python")
    assert config_for("Python").name == "typescript"


def test_javascript_shares_typescript_node_kinds() -> None:
    assert config_for("javascript") is config_for("typescript")


def test_cpp_alias() -> None:
    assert config_for("c++") is config_for("cpp")
    assert not is_supported("c++")


def test_node_kind_classification() -> None:
    python = config_for("python")
    assert python.is_function_kind("function_definition")
    assert python.is_class_kind("class_definition")
    assert python.is_import_kind("import_from_statement")
    assert not python.interface_kinds

    rust = config_for("rust")
    assert rust.is_class_kind("impl_item")
    assert rust.is_interface_kind("trait_item")
    assert not rust.is_function_kind("struct_item")


def test_size_preferences() -> None:
    config = config_for("go")
    assert config.preferred_chunk_size == 512
    assert config.max_lines == 200
    assert config.include_docs and config.include_imports


def test_configs_are_immutable() -> None:
    config = config_for("java")
    with pytest.raises(AttributeError):
        config.max_lines = 10  # type: ignore[misc]
