"""
Test data builders for folders and notes.

Mirrors the seeded folder/note arrays the API contract is written against,
plus XSS payloads and their escaped forms.
"""

from datetime import datetime, timezone
from typing import List

def make_folders_array() -> List[dict]:
    return [
        {"id": 1, "folder_name": "folder 1"},
        {"id": 2, "folder_name": "folder 2"},
        {"id": 3, "folder_name": "folder 3"},
    ]


def make_notes_array() -> List[dict]:
    modified = datetime(2029, 1, 22, 16, 28, 32, 615000, tzinfo=timezone.utc)
    return [
        {"id": 1, "note_name": "First note", "content": "Lorem ipsum one", "folder": 1, "modified": modified},
        {"id": 2, "note_name": "Second note", "content": "Lorem ipsum two", "folder": 2, "modified": modified},
        {"id": 3, "note_name": "Third note", "content": "Lorem ipsum three", "folder": 2, "modified": modified},
        {"id": 4, "note_name": "Fourth note", "content": "Lorem ipsum four", "folder": 3, "modified": modified},
    ]


def make_malicious_folder():
    malicious_folder = {
        "id": 911,
        "folder_name": 'Very naughty <script>alert("xss");</script>',
    }
    expected_folder = {
        **malicious_folder,
        "folder_name": 'Very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
    }
    return malicious_folder, expected_folder


def make_malicious_note(folder_id: int = 1):
    malicious_note = {
        "id": 911,
        "note_name": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "content": 'Bad image <img src="https://url.to.file.which/does-not.exist" onerror="alert(document.cookie);">. But not <strong>all</strong> bad.',
        "folder": folder_id,
        "modified": datetime(2029, 1, 22, 16, 28, 32, 615000, tzinfo=timezone.utc),
    }
    expected_note = {
        **malicious_note,
        "note_name": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "content": 'Bad image &lt;img src="https://url.to.file.which/does-not.exist" onerror="alert(document.cookie);"&gt;. But not &lt;strong&gt;all&lt;/strong&gt; bad.',
    }
    return malicious_note, expected_note


def without_modified(record: dict) -> dict:
    """Drop `modified` so seeded rows compare equal to JSON responses."""
    return {key: value for key, value in record.items() if key != "modified"}

