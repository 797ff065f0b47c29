#!/usr/bin/env python3
"""
Tests for the CLI entry point and the payload builders it wraps.
"""

import io
import json
import os
import unittest
from contextlib import redirect_stdout

import main
from core.config_loader import MatchingConfig
from core.models import AvailabilitySlot
from core.providers import InMemoryChildProvider
from core.scorer import MatchingService
from tests.fixtures.children import make_child, saturday

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
CONFIG = os.path.join(REPO_ROOT, 'config.yaml')
ROSTER = os.path.join(REPO_ROOT, 'roster.example.yaml')


class TestGetMatches(unittest.TestCase):

    def setUp(self):
        self.subject = make_child('subject', 'Sam', interests=['lego'])
        others = [make_child(f'c{i}', f'Kid{i}', interests=['lego']) for i in range(6)]
        self.provider = InMemoryChildProvider([self.subject] + others)
        self.service = MatchingService(MatchingConfig())

    def test_first_page(self):
        payload = main.get_matches(self.provider, self.service, 'subject', limit=2)

        self.assertEqual([m['id'] for m in payload['matches']], ['c0', 'c1'])
        self.assertEqual(payload['total'], 2)
        self.assertEqual(payload['limit'], 2)
        self.assertEqual(payload['offset'], 0)

    def test_offset_overfetches(self):
        payload = main.get_matches(self.provider, self.service, 'subject', limit=2, offset=3)

        self.assertEqual([m['id'] for m in payload['matches']], ['c3', 'c4'])
        self.assertEqual(payload['total'], 5)

    def test_offset_past_end(self):
        payload = main.get_matches(self.provider, self.service, 'subject', limit=5, offset=20)
        self.assertEqual(payload['matches'], [])

    def test_unknown_child(self):
        self.assertIsNone(main.get_matches(self.provider, self.service, 'ghost'))


class TestGetSuggestions(unittest.TestCase):

    def test_unknown_child(self):
        provider = InMemoryChildProvider([make_child('a')])
        self.assertIsNone(main.get_suggestions(provider, 'a', 'b'))

    def test_payload_shape(self):
        a = make_child('a', slots=[saturday('09:00', '12:00')])
        b = make_child('b', 'Bob', slots=[saturday('10:00', '12:00'),
                                          AvailabilitySlot.recurring('MONDAY', '09:00', '10:00')])
        payload = main.get_suggestions(InMemoryChildProvider([a, b]), 'a', 'b')

        self.assertLessEqual(len(payload['suggestions']), 3)
        for s in payload['suggestions']:
            self.assertEqual(s['dayOfWeek'], 'SATURDAY')
            self.assertTrue(s['label'].startswith('Saturday '))


class TestCli(unittest.TestCase):

    def _run(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main.main(['--config', CONFIG, '--roster', ROSTER] + list(argv))
        return code, out.getvalue()

    def test_match(self):
        code, out = self._run('match', '--child-id', 'alice', '--limit', '5')

        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload['limit'], 5)
        self.assertNotIn('alice', [m['id'] for m in payload['matches']])
        scores = [m['score'] for m in payload['matches']]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_match_unknown_child(self):
        code, out = self._run('match', '--child-id', 'nobody')
        self.assertEqual(code, 1)
        self.assertEqual(out, '')

    def test_unknown_other_child_logged_by_id(self):
        with self.assertLogs("main", "ERROR") as logs:
            code, out = self._run('suggest', '--child-id', 'alice', '--other-id', 'ghost')

        self.assertEqual(code, 1)
        self.assertEqual(out, '')
        self.assertIn("Child not found: ghost", logs.output[0])
        self.assertNotIn("alice", logs.output[0])

    def test_distance(self):
        code, out = self._run('distance', '--child-id', 'alice', '--other-id', 'bob')

        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload['distance'], "Less than 1 km away")
        self.assertEqual(payload['location'], "San Francisco, CA")

    def test_distance_without_coordinates(self):
        code, out = self._run('distance', '--child-id', 'alice', '--other-id', 'theo')
        self.assertEqual(json.loads(out)['distance'], "Location not available")

    def test_suggest(self):
        code, out = self._run('suggest', '--child-id', 'alice', '--other-id', 'bob')
        self.assertEqual(code, 0)
        self.assertIn('suggestions', json.loads(out))

    def test_missing_roster(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main.main(['--config', CONFIG, '--roster', '/nonexistent/roster.yaml',
                              'match', '--child-id', 'alice'])
        self.assertEqual(code, 1)

    def test_limit_out_of_range(self):
        with self.assertRaises(SystemExit):
            self._run('match', '--child-id', 'alice', '--limit', '51')

    def test_negative_offset(self):
        with self.assertRaises(SystemExit):
            self._run('match', '--child-id', 'alice', '--offset', '-1')


if __name__ == '__main__':
    unittest.main()
