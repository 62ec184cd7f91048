"""Tests for per-day URL hit aggregation."""
import logging
import pytest
from urlhits_core.aggregator import HitAggregator
from urlhits_core.config import INVALID_DAY_KEY
from urlhits_core.log_parser import Entry


@pytest.fixture
def aggregator():
    return HitAggregator()


class TestProcess:
    """Test counting individual lines."""

    def test_same_day_same_url_counts_up(self, aggregator):
        """Test repeated hits on one day accumulate."""
        for line in ['1700000000|/home', '1700000050|/about', '1700000100|/home']:
            aggregator.process(line)

        assert aggregator.index == {'11/14/2023 GMT': {'/home': 2, '/about': 1}}

    def test_first_hit_starts_at_one(self, aggregator):
        """Test a new URL starts with a count of 1."""
        aggregator.process('1700000000|/new')
        assert aggregator.index['11/14/2023 GMT']['/new'] == 1

    def test_same_url_different_days_not_merged(self, aggregator):
        """Test one URL on two days keeps separate counts."""
        aggregator.process('1700000000|/home')
        aggregator.process('1700086400|/home')

        assert aggregator.index == {
            '11/14/2023 GMT': {'/home': 1},
            '11/15/2023 GMT': {'/home': 1},
        }

    def test_days_are_sparse(self, aggregator):
        """Test days without hits never appear."""
        aggregator.process('0|/a')
        aggregator.process('864000|/a')  # ten days later
        assert list(aggregator.index) == ['01/01/1970 GMT', '01/11/1970 GMT']

    def test_urls_keep_first_seen_order(self, aggregator):
        """Test bucket order is the order URLs first appeared."""
        for url in ['/c', '/a', '/b', '/a']:
            aggregator.process(f'1700000000|{url}')
        assert list(aggregator.index['11/14/2023 GMT']) == ['/c', '/a', '/b']

    def test_non_numeric_timestamp_is_kept(self, aggregator):
        """Test an unreadable timestamp lands under the invalid day-key."""
        aggregator.process('yesterday|/home')

        assert aggregator.index == {INVALID_DAY_KEY: {'/home': 1}}
        assert aggregator.invalid_timestamps == 1

    def test_missing_delimiter_counts_empty_url(self, aggregator):
        """Test a line without a delimiter counts the empty URL."""
        aggregator.process('1700000000')
        assert aggregator.index == {'11/14/2023 GMT': {'': 1}}

    def test_blank_line_counts_by_default(self, aggregator):
        """Test a blank line is a hit for the empty URL at the epoch."""
        aggregator.process('')
        assert aggregator.index == {'01/01/1970 GMT': {'': 1}}
        assert aggregator.lines_processed == 1

    def test_blank_line_skipped_when_configured(self):
        """Test skip_blank_lines drops empty and whitespace-only lines."""
        aggregator = HitAggregator(skip_blank_lines=True)
        aggregator.process('')
        aggregator.process('   ')
        aggregator.process('1700000000|/home')

        assert aggregator.index == {'11/14/2023 GMT': {'/home': 1}}
        assert aggregator.lines_processed == 1

    def test_custom_delimiter(self):
        """Test aggregation with a configured delimiter."""
        aggregator = HitAggregator(delimiter=',')
        aggregator.process('1700000000,/home')
        assert aggregator.index == {'11/14/2023 GMT': {'/home': 1}}

    def test_unusable_timestamp_is_logged(self, aggregator, caplog):
        """Test unusable timestamps are reported at debug level."""
        with caplog.at_level(logging.DEBUG, logger='urlhits_core.aggregator'):
            aggregator.process('never|/home')

        assert 'Unusable timestamp' in caplog.text


class TestRecord:
    """Test counting pre-split entries."""

    def test_record_entry(self, aggregator):
        """Test recording an Entry directly."""
        aggregator.record(Entry('1700000000', '/home'))
        aggregator.record(Entry('1700000000', '/home'))
        assert aggregator.index == {'11/14/2023 GMT': {'/home': 2}}
        assert aggregator.lines_processed == 0


class TestProcessLines:
    """Test consuming a whole line source."""

    def test_counts_equal_matching_lines(self, aggregator):
        """Test each (day, url) count equals the number of its lines."""
        lines = [f'{1700000000 + i}|/page{i % 3}' for i in range(30)]
        index = aggregator.process_lines(lines)

        assert index == {'11/14/2023 GMT': {'/page0': 10, '/page1': 10, '/page2': 10}}
        assert all(count >= 1 for bucket in index.values() for count in bucket.values())

    def test_returns_owned_index(self, aggregator):
        """Test the returned Index is the aggregator's own."""
        index = aggregator.process_lines(['1700000000|/home'])
        assert index is aggregator.index

    def test_empty_source(self, aggregator):
        """Test no lines give an empty Index."""
        assert aggregator.process_lines([]) == {}

    def test_consumes_generator_once(self, aggregator):
        """Test a single-pass generator is fully consumed."""
        source = (line for line in ['0|/a', '0|/b', '0|/a'])
        index = aggregator.process_lines(source)

        assert index == {'01/01/1970 GMT': {'/a': 2, '/b': 1}}
        assert list(source) == []

    def test_instances_do_not_share_state(self):
        """Test two aggregators keep separate indexes."""
        first, second = HitAggregator(), HitAggregator()
        first.process('0|/a')
        assert second.index == {}
