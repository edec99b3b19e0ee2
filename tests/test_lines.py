"""Tests line classification and line formats."""


import unittest

from chalom.lines import (
    EntryStart,
    ItemStart,
    Plain,
    classify_entry_line,
    classify_item_line,
    continuation_key,
    format_entry_header,
    format_item_line,
)


class ClassifyEntryLineTest(unittest.TestCase):

    entry_lines = (
        ('# 2024-01-01', '2024-01-01'),
        ('# 2024-01-01 ####################', '2024-01-01'),
        ('# 2024-01-01 Monday, release day', '2024-01-01'),
        ('# 9999-99-99', '9999-99-99'),
    )

    non_entry_lines = (
        '',
        '#2024-01-01',
        '## 2024-01-01',
        ' # 2024-01-01',
        '# 2024-1-01',
        '# 24-01-01',
        '# release 2024-01-01',
        '*\t*(09:00)* item',
    )

    def test_entry_lines(self):
        for line, date in self.entry_lines:
            with self.subTest(line=line):
                self.assertEqual(
                    EntryStart(date=date, line=line),
                    classify_entry_line(line))

    def test_non_entry_lines(self):
        for line in self.non_entry_lines:
            with self.subTest(line=line):
                self.assertEqual(Plain(line), classify_entry_line(line))


class ClassifyItemLineTest(unittest.TestCase):

    item_lines = (
        ('*\t*(09:30)* write tests', '09:30', ' write tests'),
        ('* *(09:30)* write tests', '09:30', ' write tests'),
        ('*\t*(23:59)*', '23:59', ''),
        ('*\t*(25:99)* bad clock', '25:99', ' bad clock'),
        ('*\t*(00:00)*no space', '00:00', 'no space'),
    )

    non_item_lines = (
        '',
        'free text',
        '*(09:30)* no gap',
        '*\t(09:30)* missing asterisk',
        '*\t*(9:30)* short hour',
        '*\t*(09:30) unclosed',
        '-\t*(09:30)* dash bullet',
        '  *\t*(09:30)* indented',
        '# 2024-01-01',
    )

    def test_item_lines(self):
        for line, time, label in self.item_lines:
            with self.subTest(line=line):
                self.assertEqual(
                    ItemStart(time=time, label=label, line=line),
                    classify_item_line(line))

    def test_non_item_lines(self):
        for line in self.non_item_lines:
            with self.subTest(line=line):
                self.assertEqual(Plain(line), classify_item_line(line))


class FormatTest(unittest.TestCase):

    def test_entry_header(self):
        header = format_entry_header('2024-03-05')
        self.assertEqual('# 2024-03-05 ' + '#' * 60, header)
        self.assertEqual('2024-03-05', classify_entry_line(header).date)

    def test_item_line(self):
        line = format_item_line('08:05', 'standup')
        self.assertEqual('*\t*(08:05)* standup', line)
        self.assertEqual(
            ItemStart(time='08:05', label=' standup', line=line),
            classify_item_line(line))


class ContinuationKeyTest(unittest.TestCase):

    def test_earliest_key(self):
        self.assertEqual('09:00', continuation_key(['09:00', '10:00', '11:30']))
        self.assertEqual('2023-12-31', continuation_key(['2023-12-31', '2024-01-01']))

    def test_single_key(self):
        self.assertEqual('12:00', continuation_key(['12:00']))
