"""Test module for emmet_expression_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import emmet_expression_parser

    # Assert
    assert emmet_expression_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import emmet_expression_parser

    # Assert
    assert isinstance(emmet_expression_parser.__version__, str)
    assert emmet_expression_parser.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import emmet_expression_parser

    # Assert
    assert emmet_expression_parser.__author__ == "Emmet Expression Parser Team"


def test_package_all_exports() -> None:
    """Test that every name in __all__ is importable from the package."""
    # Arrange & Act
    import emmet_expression_parser

    # Assert
    for name in emmet_expression_parser.__all__:
        assert hasattr(emmet_expression_parser, name), name
    assert "parse" in emmet_expression_parser.__all__
    assert "split_at_top_level" in emmet_expression_parser.__all__


def test_literal_package_import_first() -> None:
    """Test importing a subpackage directly loads the whole package."""
    # Arrange & Act
    from emmet_expression_parser.literal import match_literal

    # Assert
    assert match_literal("a").tag == "a"
