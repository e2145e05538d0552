"""Tests for record and list parsing."""

import logging

import pytest

from invoice_records import (
    UNITED_STATES_DOLLAR,
    Contact,
    DuplicateFieldError,
    InvoiceRecordsError,
    LineItem,
    MalformedPairError,
    MissingFieldsError,
    Money,
    NotANumberError,
    NotMoneyError,
    ParserConfig,
    RecordParser,
    UnknownKeyError,
    parse_list,
    parse_record,
)

FULL_CONTACT = (
    "company: Company, firstName: John, lastName: Smith, email: johnsmith@example.com, "
    "phoneNo: 123123123, address: 1 Smith Street;Smith Town;Smith;SM20 123;UK"
)
ADDRESS = ["1 Smith Street", "Smith Town", "Smith", "SM20 123", "UK"]


@pytest.fixture
def parser() -> RecordParser:
    """Create a parser with the default configuration."""
    return RecordParser()


class TestParseRecord:
    """Tests for parsing a single record."""

    def test_all_fields(self, parser: RecordParser) -> None:
        """Test a record with every field given."""
        contact = parser.parse_record(FULL_CONTACT, Contact())

        assert contact == Contact(
            company="Company",
            first_name="John",
            last_name="Smith",
            email="johnsmith@example.com",
            phone_number="123123123",
            address=ADDRESS,
        )

    def test_returns_same_record(self, parser: RecordParser) -> None:
        """Test the record is filled in place."""
        contact = Contact()

        assert parser.parse_record(FULL_CONTACT, contact) is contact

    def test_short_aliases(self, parser: RecordParser) -> None:
        """Test terse aliases without spaces."""
        contact = parser.parse_record(
            "f:John,l:Smith,e:johnsmith@example.com,p:123123123,a:1 Smith Street;Smith Town;Smith;SM20 123;UK",
            Contact(),
        )

        assert contact.first_name == "John"
        assert contact.company == "John Smith"
        assert contact.address == ADDRESS

    def test_defaults_waive_completeness(self, parser: RecordParser) -> None:
        """Test a record relying on defaults for optional fields parses."""
        item = parser.parse_record("d:Work;r:$10", LineItem())

        assert item.hours_quantity == 1
        assert item.tax == Money.zero()
        assert item.subtotal() == Money(minor_units=1000, currency=UNITED_STATES_DOLLAR)
        assert item.subtotal().symbol_form() == "$10.00"

    def test_missing_required_field(self, parser: RecordParser) -> None:
        """Test a missing required field is reported with every declared field."""
        with pytest.raises(MissingFieldsError) as excinfo:
            parser.parse_record(
                "lastName: Smith, email: johnsmith@example.com, phoneNo: 123123123, "
                "address: 1 Smith Street;Smith Town",
                Contact(),
            )

        error = excinfo.value
        assert error.missing == ["FirstName"]
        assert error.declared == ["Company", "FirstName", "LastName", "Email", "PhoneNo", "Address"]
        assert "you need to give 6 key-value pairs" in str(error)
        assert "\t- PhoneNo\n" in str(error)

    def test_missing_several_fields(self, parser: RecordParser) -> None:
        """Test every missing required field is named."""
        with pytest.raises(MissingFieldsError) as excinfo:
            parser.parse_record("h: 2", LineItem())

        assert excinfo.value.missing == ["Description", "Rate"]

    def test_blank_value_counts_as_missing(self, parser: RecordParser) -> None:
        """Test an explicitly blank required field is still missing."""
        with pytest.raises(MissingFieldsError) as excinfo:
            parser.parse_record("d: ; r: $5", LineItem())

        assert excinfo.value.missing == ["Description"]

    def test_malformed_pair(self, parser: RecordParser) -> None:
        """Test a segment without a key separator."""
        with pytest.raises(MalformedPairError) as excinfo:
            parser.parse_record(
                "firstName; John, lastName: Smith, email: johnsmith@example.com", Contact()
            )

        error = excinfo.value
        assert error.text == "firstName; John"
        assert 'cannot find key in text: "firstName; John"' in str(error)
        assert error.accepted_aliases["Address"] == ["a", "addr", "address"]

    def test_too_many_key_separators(self, parser: RecordParser) -> None:
        """Test a segment with more than one key separator."""
        with pytest.raises(MalformedPairError):
            parser.parse_record("d: Meeting 10:30; r: $5", LineItem())

    def test_duplicate_field(self, parser: RecordParser) -> None:
        """Test giving the same field twice, even through different aliases."""
        with pytest.raises(DuplicateFieldError) as excinfo:
            parser.parse_record("f:John,f:Jack,l:Smith,e:a@b.com,p:1,a:X", Contact())

        assert excinfo.value.field_name == "first_name"
        assert "multiple times" in str(excinfo.value)

        with pytest.raises(DuplicateFieldError):
            parser.parse_record("d: A; desc: B; r: $1", LineItem())

    def test_duplicate_stops_parsing(self, parser: RecordParser) -> None:
        """Test nothing after the duplicate is read."""
        contact = Contact()

        with pytest.raises(DuplicateFieldError):
            parser.parse_record("f:John,f:Jack,l:Smith", contact)

        assert contact.last_name == ""

    def test_unknown_key(self, parser: RecordParser) -> None:
        """Test an unknown key."""
        with pytest.raises(UnknownKeyError) as excinfo:
            parser.parse_record("d: Work; price: $10", LineItem())

        assert excinfo.value.key == "price"
        assert excinfo.value.text == "price: $10"

    def test_coercion_errors_propagate(self, parser: RecordParser) -> None:
        """Test number and money errors surface unchanged."""
        with pytest.raises(NotANumberError):
            parser.parse_record("d: Work; h: two; r: $10", LineItem())
        with pytest.raises(NotMoneyError):
            parser.parse_record("d: Work; r: ten dollars", LineItem())

    def test_explicit_depth(self, parser: RecordParser) -> None:
        """Test a contact nested one level down splits on ';' and '|'."""
        contact = parser.parse_record(
            "f: Ann; l: Lee; e: ann@example.com; p: 1; a: 1 Road| Town", Contact(), depth=1
        )

        assert contact.address == ["1 Road", "Town"]

    def test_invalid_depth(self, parser: RecordParser) -> None:
        """Test the innermost level cannot hold a record."""
        with pytest.raises(ValueError):
            parser.parse_record("d: Work", LineItem(), depth=2)

    def test_module_level_function(self) -> None:
        """Test the default parser shortcut."""
        contact = parse_record(FULL_CONTACT, Contact())

        assert contact.company == "Company"

    def test_logs_defaults(self, parser: RecordParser, caplog: pytest.LogCaptureFixture) -> None:
        """Test defaulted fields are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="invoice_records")

        parser.parse_record("d:Work;r:$10", LineItem())

        assert "defaulted hours_quantity, tax" in caplog.text


class TestParseList:
    """Tests for parsing lists of records."""

    def test_order_preserved(self, parser: RecordParser) -> None:
        """Test records come back in input order."""
        items = parser.parse_list("d: C; r: $1, d: A; r: $2, d: B; r: $3", LineItem)

        assert [item.description for item in items] == ["C", "A", "B"]
        assert [item.rate.minor_units for item in items] == [100, 200, 300]

    def test_single_record(self, parser: RecordParser) -> None:
        """Test a list with one record."""
        items = parser.parse_list("d:Work;r:$10", LineItem)

        assert len(items) == 1
        assert items[0].hours_quantity == 1

    def test_fresh_record_per_segment(self, parser: RecordParser) -> None:
        """Test each segment gets its own record."""
        items = parser.parse_list("d: A; h: 5; r: $1, d: B; r: $1", LineItem)

        assert items[0] is not items[1]
        assert items[1].hours_quantity == 1

    def test_fails_fast(self, parser: RecordParser) -> None:
        """Test parsing stops at the first bad record."""
        created: list[LineItem] = []

        def factory() -> LineItem:
            item = LineItem()
            created.append(item)
            return item

        with pytest.raises(MissingFieldsError) as excinfo:
            parser.parse_list("d: A; r: $1, d: B, d: C; r: nonsense", factory)

        assert len(created) == 2
        assert str(excinfo.value).startswith("record 2: ")

    def test_any_error_kind_propagates(self, parser: RecordParser) -> None:
        """Test coercion errors inside a list reach the caller."""
        with pytest.raises(InvoiceRecordsError) as excinfo:
            parser.parse_list("d: A; r: $1, d: B; r: nonsense", LineItem)

        assert isinstance(excinfo.value, NotMoneyError)
        assert "record 2" in str(excinfo.value)

    def test_module_level_function(self) -> None:
        """Test the default parser shortcut."""
        items = parse_list("d: A; r: £1, d: B; r: £2", LineItem)

        assert len(items) == 2


class TestParserConfiguration:
    """Tests for parser configuration."""

    def test_default_config(self, parser: RecordParser) -> None:
        """Test the parser gets a default config."""
        assert parser.config == ParserConfig()

    def test_email_validation_can_be_disabled(self) -> None:
        """Test a lenient parser accepts any email text."""
        parser = RecordParser(ParserConfig(validate_email=False))

        contact = parser.parse_record("f:John,l:Smith,e:not an email,p:1,a:X", Contact())

        assert contact.email == "not an email"

    def test_parse_money_uses_registry(self, parser: RecordParser) -> None:
        """Test money parsing through the parser."""
        assert parser.parse_money("$2.50").minor_units == 250
