class ResultsContextFilter:
    """
    Adds request_id/student_id to log records.
    Missing values are filled with '-'.
    """
    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        if not hasattr(record, "student_id"):
            record.student_id = "-"
        if not hasattr(record, "duration_ms"):
            record.duration_ms = "-"
        if not hasattr(record, "level_color"):
            record.level_color = ""
        # Color by severity (warning yellow, error red)
        if record.levelno >= 40:
            record.level_color = "\x1b[31m"  # red
        elif record.levelno >= 30:
            record.level_color = "\x1b[33m"  # yellow
        return True
