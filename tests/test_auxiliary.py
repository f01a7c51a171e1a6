from dataclasses import dataclass, field

import pytest

from auxiliary import (
    calculate_tolerances,
    convert_string_size_to_bytes,
    get_operator_size_matches,
    is_directory_empty,
    is_extension_valid,
    to_file_type,
    to_operator_type,
    validate_struct,
)
from koinos_types import FileType, OperatorType, ToleranceResults


class TestToFileType:
    """Tests for to_file_type."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("any", FileType.ANY),
            ("video", FileType.VIDEO),
            ("image", FileType.IMAGE),
            ("archive", FileType.ARCHIVE),
            ("documents", FileType.DOCUMENTS),
            ("ANY", FileType.ANY),
            ("ViDeO", FileType.VIDEO),
        ],
    )
    def test_known(self, name, expected):
        assert to_file_type(name) is expected

    @pytest.mark.parametrize("name", ["invalid", ""])
    def test_unknown(self, name):
        assert to_file_type(name) is None


class TestToOperatorType:
    """Tests for to_operator_type."""

    @pytest.mark.parametrize(
        "aliases,expected",
        [
            (["et", "equal to", "equalto", "equal", "=="], OperatorType.EQUAL_TO),
            (["gt", "greater", "greater than", "greaterthan", ">"], OperatorType.GREATER_THAN),
            (["gte", "greater than or equal to", "greaterthanorequalto", ">="], OperatorType.GREATER_THAN_EQUAL_TO),
            (["lt", "less", "less than", "lessthan", "<"], OperatorType.LESS_THAN),
            (["lte", "less than or equal to", "lessthanorequalto", "<="], OperatorType.LESS_THAN_EQUAL_TO),
        ],
    )
    def test_aliases(self, aliases, expected):
        for alias in aliases:
            assert to_operator_type(alias) is expected
            assert to_operator_type(alias.upper()) is expected

    def test_unknown(self):
        assert to_operator_type("") is None
        assert to_operator_type("about") is None


class TestIsExtensionValid:
    """Tests for is_extension_valid."""

    @pytest.mark.parametrize(
        "file_type,path,expected",
        [
            (FileType.ANY, "example.file", True),
            (FileType.ANY, "example", True),
            (FileType.VIDEO, "video.mp4", True),
            (FileType.VIDEO, "VIDEO.MP4", True),
            (FileType.VIDEO, "document.txt", False),
            (FileType.VIDEO, "video", False),
            (FileType.IMAGE, "picture.jpg", True),
            (FileType.IMAGE, "picture.png", True),
            (FileType.IMAGE, "video.mp4", False),
            (FileType.ARCHIVE, "archive.zip", True),
            (FileType.ARCHIVE, "archive.tar", True),
            (FileType.ARCHIVE, "image.jpg", False),
            (FileType.DOCUMENTS, "dir/document.pdf", True),
            (FileType.DOCUMENTS, "document.docx", True),
            (FileType.DOCUMENTS, "document", False),
            ("unknown_type", "file.any", False),
        ],
    )
    def test_extensions(self, file_type, path, expected):
        assert is_extension_valid(file_type, path) is expected


class TestCalculateTolerances:
    """Tests for calculate_tolerances."""

    def test_basic(self):
        assert calculate_tolerances(1024, 10) == ToleranceResults(10240, 11264, 0)

    def test_zero_tolerance(self):
        assert calculate_tolerances(2048, 0) == ToleranceResults(0, 2048, 2048)

    def test_lower_bound_clamped(self):
        assert calculate_tolerances(500, 600) == ToleranceResults(614400, 614900, 0)

    def test_negative_tolerance(self):
        with pytest.raises(ValueError, match="tolerance_size cannot be negative"):
            calculate_tolerances(10737418240, -50)

    def test_negative_wanted_size(self):
        with pytest.raises(ValueError, match="wanted_size cannot be negative"):
            calculate_tolerances(-1024, 10)


class TestGetOperatorSizeMatches:
    """Tests for get_operator_size_matches."""

    @pytest.mark.parametrize(
        "operator,wanted,tolerance,size,expected",
        [
            (OperatorType.EQUAL_TO, 1024, 0, 1024, True),
            (OperatorType.EQUAL_TO, 1024, 1.0, 1050, True),
            (OperatorType.EQUAL_TO, 1024, 1.0, 2049, False),
            (OperatorType.EQUAL_TO, 1024, 0, 0, False),
            (OperatorType.LESS_THAN, 1024, 0, 1023, True),
            (OperatorType.LESS_THAN, 1024, 0, 1024, False),
            (OperatorType.LESS_THAN, 1024, 1.0, 1025, False),
            (OperatorType.LESS_THAN, 1024, 1.0, 1022, True),
            (OperatorType.LESS_THAN_EQUAL_TO, 1024, 0, 1024, True),
            (OperatorType.GREATER_THAN, 1024, 0, 1025, True),
            (OperatorType.GREATER_THAN, 1024, 0, 1024, False),
            (OperatorType.GREATER_THAN_EQUAL_TO, 1024, 0, 1024, True),
            (OperatorType.GREATER_THAN_EQUAL_TO, 1024, 0, 1023, False),
            (None, 1024, 1.0, 1025, True),
            (OperatorType.EQUAL_TO, 315000, 0.05, 314950, True),
            (OperatorType.EQUAL_TO, 315000, 0.05, 330000, False),
            (OperatorType.EQUAL_TO, 315000, 0.05, 299000, False),
        ],
    )
    def test_matches(self, operator, wanted, tolerance, size, expected):
        assert get_operator_size_matches(operator, wanted, tolerance, size) is expected

    def test_tolerance_error_is_wrapped(self):
        with pytest.raises(ValueError, match="error calculating tolerances tolerance_size cannot be negative"):
            get_operator_size_matches(OperatorType.EQUAL_TO, 0, -1, 1024)

    def test_wanted_size_error_is_wrapped(self):
        with pytest.raises(ValueError, match="error calculating tolerances wanted_size cannot be negative"):
            get_operator_size_matches(OperatorType.EQUAL_TO, -1, 1, 1024)


class TestConvertStringSizeToBytes:
    """Tests for convert_string_size_to_bytes."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1 B", 1),
            ("10 KB", 10 * 1024),
            ("1 MB", 1024**2),
            ("5 GB", 5 * 1024**3),
            ("100 GB", 100 * 1024**3),
            ("2.5 TB", int(2.5 * 1024**4)),
            ("1 kB", 1024),
            ("10MB", 10 * 1024**2),
        ],
    )
    def test_valid(self, text, expected):
        assert convert_string_size_to_bytes(text) == expected

    def test_empty(self):
        with pytest.raises(ValueError, match="size cannot be empty"):
            convert_string_size_to_bytes(" ")

    @pytest.mark.parametrize("text", ["1000", "not a size"])
    def test_invalid_format(self, text):
        with pytest.raises(ValueError, match="invalid size format"):
            convert_string_size_to_bytes(text)

    @pytest.mark.parametrize("text", ["1000 M", "1000 XYZ"])
    def test_invalid_unit(self, text):
        with pytest.raises(ValueError, match="invalid size unit"):
            convert_string_size_to_bytes(text)

    def test_bad_number(self):
        with pytest.raises(ValueError):
            convert_string_size_to_bytes("12.34.56 MB")


@dataclass
class Colors:
    background: str = ""
    foreground: str = ""


@dataclass
class Application:
    name: str = "Test App"
    description: str = "Test Description"
    style: Colors = field(default_factory=lambda: Colors("red", "white"))
    usage: str = "Test Usage"
    version: str = "1.0.0"


class TestValidateStruct:
    """Tests for validate_struct."""

    def test_valid(self):
        validate_struct(Application())

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"name": ""}, "name cannot be empty"),
            ({"description": ""}, "description cannot be empty"),
            ({"style": Colors()}, "style cannot be an empty struct"),
            ({"usage": ""}, "usage cannot be empty"),
            ({"version": ""}, "version cannot be empty"),
        ],
    )
    def test_first_failure_reported(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            validate_struct(Application(**overrides))

    def test_first_field_wins(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            validate_struct(Application(name="", version=""))

    @pytest.mark.parametrize("value", [None, "app", {"name": "x"}, Application])
    def test_not_a_dataclass_instance(self, value):
        with pytest.raises(TypeError, match="validate_struct expects a dataclass instance"):
            validate_struct(value)


class TestIsDirectoryEmpty:
    """Tests for is_directory_empty."""

    def test_empty(self, tmp_path):
        assert is_directory_empty(tmp_path) is True

    def test_not_empty(self, tmp_path):
        (tmp_path / "file.txt").write_text("x")
        assert is_directory_empty(str(tmp_path)) is False

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="directory does not exist"):
            is_directory_empty(tmp_path / "missing")

    def test_file(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(NotADirectoryError, match="is not a directory"):
            is_directory_empty(path)
