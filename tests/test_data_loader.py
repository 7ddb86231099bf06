"""Tests for loading contract data from configuration documents."""

import pytest
from num2words import num2words

from contractgen.core.contract_data import ContractData
from contractgen.core.placeholder_resolver import resolve_placeholders
from contractgen.processors.data_loader import load_contract_data, parse_contract_data
from contractgen.utils.error_handler import ConfigurationError


class TestParseContractData:
    """Test suite for parse_contract_data."""

    def test_sample_configuration(self, sample_config_text):
        data = parse_contract_data(sample_config_text)

        assert isinstance(data, ContractData)
        assert data["ContractFormat"] == "{Prefix}-{CName}-{Year}{Month}{Day}"
        assert data["Day"] == 5
        assert data["ComName"] == "«Smart Teams» LLC"
        assert data.text("Area") == "45"
        assert data.text("ClientPhone") == "998901112233"

    def test_contract_number_with_spaces_is_one_scalar(self):
        data = parse_contract_data("ContractNumber: 2024 001\n")
        assert data["ContractNumber"] == "2024 001"

    def test_unquoted_format_would_not_parse_without_sanitizing(self):
        data = parse_contract_data("ContractFormat: {Prefix}-{Year}\n")
        assert data["ContractFormat"] == "{Prefix}-{Year}"

    def test_invalid_yaml_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_contract_data("Day: [1, 2\nMonth: 3\n", source="broken.contract")
        assert "broken.contract" in exc_info.value.message

    def test_empty_document_raises(self):
        with pytest.raises(ConfigurationError):
            parse_contract_data("# only a comment\n")

    def test_non_mapping_document_raises(self):
        with pytest.raises(ConfigurationError):
            parse_contract_data("- Day\n- Month\n")

    def test_time_value_stays_text(self):
        data = parse_contract_data("StartTime: 10:30\n")
        assert data["StartTime"] == "10:30"

    @pytest.mark.parametrize("line,key,expected", [
        ("Amount: 0750\n", "Amount", 750),
        ("Area: 045\n", "Area", 45),
        ("Amount: 0x1F\n", "Amount", 31),
        ("Amount: 0o17\n", "Amount", 15),
        ("Amount: -012\n", "Amount", -12),
    ])
    def test_integers_follow_core_schema(self, line, key, expected):
        assert parse_contract_data(line)[key] == expected

    @pytest.mark.parametrize("word", ["no", "yes", "on", "off", "y", "N"])
    def test_yes_no_words_stay_text(self, word):
        data = parse_contract_data(f"Note: {word}\n")
        assert data["Note"] == word

    def test_true_false_are_booleans(self):
        data = parse_contract_data("Paid: true\nSigned: False\n")
        assert data["Paid"] is True
        assert data["Signed"] is False

    def test_floats_and_special_values(self):
        data = parse_contract_data("Rate: 1.5\nBig: 1e3\nSeparated: 1_000\n")
        assert data["Rate"] == 1.5
        assert data["Big"] == 1000.0
        assert data["Separated"] == "1_000"

    def test_leading_zero_amount_in_words(self):
        data = parse_contract_data("Amount: 0750\n")
        result = resolve_placeholders("[AmountText]", data, "RC-1")
        assert result == {"AmountText": num2words(750, lang="ru")}

    def test_record_is_read_only(self, sample_config_text):
        data = parse_contract_data(sample_config_text)
        with pytest.raises(TypeError):
            data["Day"] = 6


class TestLoadContractData:
    """Test suite for load_contract_data."""

    def test_load_from_file(self, create_config_file, sample_config_text):
        path = create_config_file(sample_config_text)
        data = load_contract_data(path)
        assert data["Year"] == 2024

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_contract_data(tmp_path / "missing.contract")
        assert "not found" in exc_info.value.message

    def test_file_with_byte_order_mark(self, tmp_path):
        path = tmp_path / "bom.contract"
        path.write_bytes("\ufeffDay: 5\nArea: 12\n".encode("utf-8"))

        data = load_contract_data(str(path))

        assert data["Day"] == 5
        assert data.text("Area") == "12"


class TestContractData:
    """Test suite for the ContractData record."""

    def test_lookup_or_empty(self):
        data = ContractData({"Area": 45, "Rate": 1.5, "Paid": True, "Total": 5.0, "Note": None})

        assert data.text("Area") == "45"
        assert data.text("Rate") == "1.5"
        assert data.text("Paid") == "true"
        assert data.text("Total") == "5"
        assert data.text("Note") == ""
        assert data.text("Missing") == ""

    def test_has_ignores_null_values(self):
        data = ContractData({"Note": None, "Zero": 0})
        assert not data.has("Note")
        assert not data.has("Missing")
        assert data.has("Zero")

    def test_from_mapping_stringifies_keys(self):
        data = ContractData.from_mapping({1: "one", "Area": "45"})
        assert data["1"] == "one"
        assert set(data) == {"1", "Area"}
