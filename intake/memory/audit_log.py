"""Append-only plain-text record of every submitted request."""

import os

SEPARATOR = "-" * 19


def format_timestamp(ts):
    return ts.strftime("%d.%m.%Y %H:%M")


def format_record(submission):
    return (
        f"[{format_timestamp(submission.timestamp)}] Request from ID:{submission.requester_id}\n"
        f"Model: {submission.model}\n"
        f"Problem: {submission.problem}\n"
        f"Phone: {submission.phone}\n"
        f"Photos: {len(submission.attachments)}\n"
        f"{SEPARATOR}\n"
    )


class AuditLog:
    def __init__(self, path):
        self.path = path

    def append(self, submission):
        """Write one record. Returns False if the write failed."""
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(format_record(submission))
        except OSError as e:
            print(f"  [audit] failed to write {self.path}: {e}")
            return False
        return True
