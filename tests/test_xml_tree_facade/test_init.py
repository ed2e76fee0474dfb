"""Test module for xml_tree_facade package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import xml_tree_facade

    # Assert
    assert xml_tree_facade is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import xml_tree_facade

    # Assert
    assert isinstance(xml_tree_facade.__version__, str)
    assert xml_tree_facade.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import xml_tree_facade

    # Assert
    assert xml_tree_facade.__author__ == "XML Tree Facade Team"


def test_package_all_exports() -> None:
    """Test that every name in __all__ resolves."""
    # Arrange & Act
    import xml_tree_facade

    # Assert
    for name in xml_tree_facade.__all__:
        assert hasattr(xml_tree_facade, name), name

    for name in [
        "create_document",
        "parse_document",
        "serialize_document",
        "load_document",
        "save_document",
        "find_nodes",
        "add_node",
        "add_nodes",
        "remove_node",
        "XMLTreeFacade",
    ]:
        assert name in xml_tree_facade.__all__


def test_level_one_workflow() -> None:
    """Test the module-level functions work together."""
    # Arrange
    from xml_tree_facade import add_node, create_document, find_nodes, serialize_document

    document = create_document("catalog")

    # Act
    item = add_node(document, "item", {"id": "1"}, "Widget")

    # Assert
    assert find_nodes(document, "item") == [item]
    assert '<item id="1">Widget</item>' in serialize_document(document)
