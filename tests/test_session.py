"""Tests for per-session aggregation."""

from conftest import message, tool_call, write_jsonl

from src.dashboard.aggregation.session import make_preview, parse_session, summarize_records
from src.dashboard.utils import parse_timestamp_ms


class TestSummarizeRecords:
    """Tests for summarize_records function."""

    def test_no_records(self):
        """Test empty transcript yields zero counters."""
        summary = summarize_records([], 's1')
        assert summary['sessionId'] == 's1'
        assert summary['model'] == 'unknown'
        assert summary['lastActivity'] is None
        assert summary['messageCount'] == 0
        assert summary['toolCalls'] == 0
        assert summary['inputTokens'] == 0
        assert summary['outputTokens'] == 0
        assert summary['totalTokens'] == 0
        assert summary['recentMessages'] == []
        assert summary['activityLog'] == []

    def test_non_finite_timestamp_ignored(self):
        records = [
            {'type': 'custom', 'timestamp': float('inf')},
            message('assistant', 'hi', timestamp='2026-01-01T10:00:00Z'),
        ]
        summary = summarize_records(records, 's1')
        assert summary['messageCount'] == 1
        assert summary['lastActivity'] == parse_timestamp_ms('2026-01-01T10:00:00Z')

    def test_only_non_message_records(self):
        records = [
            {'type': 'session_start', 'timestamp': '2026-01-01T10:00:00Z'},
            {'type': 'custom'},
        ]
        summary = summarize_records(records, 's1')
        assert summary['messageCount'] == 0
        assert summary['totalTokens'] == 0
        assert summary['lastActivity'] == parse_timestamp_ms('2026-01-01T10:00:00Z')

    def test_user_and_tool_result_count_as_input(self):
        records = [
            message('user', 'a' * 40),
            message('toolResult', [{'type': 'toolResult', 'content': 'b' * 10}]),
        ]
        summary = summarize_records(records, 's1')
        # '"bbbbbbbbbb"' is 12 chars -> 3 tokens
        assert summary['inputTokens'] == 10 + 3
        assert summary['outputTokens'] == 0
        assert summary['messageCount'] == 0

    def test_assistant_counts_as_output(self):
        records = [message('assistant', [{'type': 'text', 'text': 'x' * 80}])]
        summary = summarize_records(records, 's1')
        assert summary['outputTokens'] == 20
        assert summary['messageCount'] == 1

    def test_total_is_input_plus_output(self):
        records = [
            message('user', 'q' * 17),
            message('assistant', 'a' * 33),
            message('toolResult', 'r' * 9),
        ]
        summary = summarize_records(records, 's1')
        assert summary['totalTokens'] == summary['inputTokens'] + summary['outputTokens']

    def test_model_is_last_model_change(self):
        records = [
            {'type': 'model_change', 'modelId': 'model-a'},
            {'type': 'model_change', 'modelId': None},
            {'type': 'model_change', 'modelId': 'model-b'},
            {'type': 'model_change'},
        ]
        assert summarize_records(records, 's1')['model'] == 'model-b'

    def test_last_activity_is_max_timestamp(self):
        records = [
            message('user', 'hi', timestamp='2026-01-01T12:05:00Z'),
            message('assistant', 'yo', timestamp='2026-01-01T12:01:00Z'),
            {'type': 'custom', 'timestamp': 'garbage'},
        ]
        summary = summarize_records(records, 's1')
        assert summary['lastActivity'] == parse_timestamp_ms('2026-01-01T12:05:00Z')

    def test_tool_calls_counted_and_logged(self):
        records = [message('assistant', [
            tool_call('read', {'path': '/tmp/a'}),
            {'type': 'toolCall', 'arguments': {}},
        ])]
        summary = summarize_records(records, 's1')
        assert summary['toolCalls'] == 2
        tool_entries = [e for e in summary['activityLog'] if e['type'] == 'tool_call']
        # Newest first
        assert [e['tool'] for e in tool_entries] == ['unknown', 'read']
        read_entry = tool_entries[1]
        assert read_entry['args'] == '{"path":"/tmp/a"}'
        assert read_entry['tokens'] == summary['outputTokens']

    def test_tool_args_preview_capped(self):
        records = [message('assistant', [tool_call('exec', {'cmd': 'x' * 500})])]
        entry = summarize_records(records, 's1')['activityLog'][0]
        assert len(entry['args']) == 200
        assert 'x' * 500 in entry['fullArgs']

    def test_assistant_text_logged(self):
        records = [message('assistant', [
            {'type': 'text', 'text': '  Working on it  '},
            tool_call('exec', {'cmd': 'ls'}),
        ])]
        summary = summarize_records(records, 's1')
        assert len(summary['recentMessages']) == 1
        recent = summary['recentMessages'][0]
        assert recent['preview'] == 'Working on it'
        assert recent['full'] == 'Working on it'
        assert recent['toolCalls'][0]['name'] == 'exec'
        kinds = [e['type'] for e in summary['activityLog']]
        assert kinds == ['message', 'tool_call']

    def test_assistant_plain_string_content(self):
        records = [message('assistant', 'plain answer')]
        summary = summarize_records(records, 's1')
        assert summary['recentMessages'][0]['full'] == 'plain answer'

    def test_whitespace_assistant_text_not_logged(self):
        records = [message('assistant', [{'type': 'text', 'text': '   '}])]
        summary = summarize_records(records, 's1')
        assert summary['recentMessages'] == []
        assert summary['activityLog'] == []
        assert summary['messageCount'] == 1

    def test_user_text_only_in_activity_log(self):
        records = [message('user', 'please do the thing')]
        summary = summarize_records(records, 's1')
        assert summary['recentMessages'] == []
        assert summary['activityLog'][0]['type'] == 'user_message'
        assert summary['activityLog'][0]['full'] == 'please do the thing'

    def test_tool_result_not_logged(self):
        records = [message('toolResult', 'output text')]
        assert summarize_records(records, 's1')['activityLog'] == []

    def test_recent_messages_capped_newest_first(self):
        records = [message('assistant', f'msg {i}') for i in range(15)]
        recent = summarize_records(records, 's1')['recentMessages']
        assert len(recent) == 10
        assert recent[0]['full'] == 'msg 14'
        assert recent[-1]['full'] == 'msg 5'

    def test_activity_log_capped_newest_first(self):
        records = [message('user', f'ask {i}') for i in range(60)]
        log = summarize_records(records, 's1')['activityLog']
        assert len(log) == 50
        assert log[0]['full'] == 'ask 59'
        assert log[-1]['full'] == 'ask 10'

    def test_unknown_record_types_ignored(self):
        records = [
            {'type': 'compaction', 'message': {'role': 'assistant', 'content': 'x' * 40}},
            {'type': 'message'},
            {'type': 'message', 'message': 'not a dict'},
        ]
        summary = summarize_records(records, 's1')
        assert summary['messageCount'] == 0
        assert summary['totalTokens'] == 0


class TestMakePreview:
    """Tests for make_preview function."""

    def test_short_text_unchanged(self):
        assert make_preview('short') == 'short'

    def test_long_text_truncated_with_ellipsis(self):
        preview = make_preview('y' * 250)
        assert preview == 'y' * 200 + '…'

    def test_exactly_200_not_truncated(self):
        assert make_preview('z' * 200) == 'z' * 200


class TestParseSession:
    """Tests for parse_session function."""

    def test_malformed_line_then_valid_message(self, tmp_path):
        """Test malformed line contributes nothing."""
        jsonl_file = write_jsonl(tmp_path / "s1.jsonl", [
            '{"type": "message", "message": {broken',
            message('assistant', [{'type': 'text', 'text': 'x' * 80}]),
        ])
        summary = parse_session(jsonl_file, 's1')
        assert summary['messageCount'] == 1
        assert summary['outputTokens'] == 20
        assert summary['inputTokens'] == 0

    def test_missing_file(self, tmp_path):
        summary = parse_session(tmp_path / "missing.jsonl", 's1')
        assert summary['messageCount'] == 0
        assert summary['lastActivity'] is None

    def test_overflowing_timestamp_line_dropped(self, tmp_path):
        """Test a line with a non-finite number is dropped, not fatal."""
        jsonl_file = write_jsonl(tmp_path / "s1.jsonl", [
            '{"type": "custom", "timestamp": 1e400}',
            '{"type": "custom", "timestamp": NaN}',
            message('assistant', 'x' * 8, timestamp='2026-01-01T10:00:00Z'),
        ])
        summary = parse_session(jsonl_file, 's1')
        assert summary['messageCount'] == 1
        assert summary['lastActivity'] == parse_timestamp_ms('2026-01-01T10:00:00Z')
