from .transcript import APOLOGY, Transcript, TranscriptController, format_error

__all__ = ["APOLOGY", "Transcript", "TranscriptController", "format_error"]
