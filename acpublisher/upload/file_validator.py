"""
Input Validator for the Release Workflow

Checks the required command options and opens the local files the workflow
reads, before any network call is made.
"""

from typing import BinaryIO

from .models import UploadApkOptions, ValidationResult
from ..utils.exceptions import ValidationError


class InputValidator:
    """Validates command options and local files before publishing"""

    REQUIRED_OPTIONS = [
        ("token", "Token"),
        ("owner", "Owner"),
        ("app", "App"),
        ("apk", "Apk"),
    ]

    def validate_options(self, options: UploadApkOptions) -> ValidationResult:
        """Ensure every required option has a non-empty value"""
        for field_name, label in self.REQUIRED_OPTIONS:
            if not getattr(options, field_name):
                return ValidationResult(
                    is_valid=False,
                    error_message=f"{label} is required",
                    field_name=field_name
                )
        return ValidationResult(is_valid=True)

    def open_binary(self, path: str, description: str) -> BinaryIO:
        """Open a local file for the duration of the run"""
        try:
            return open(path, "rb")
        except OSError as e:
            raise ValidationError(f"Cannot open {description} file:\n{e}", original_exception=e) from e

    def resolve_release_notes(self, options: UploadApkOptions) -> str:
        """Release notes file contents win over the literal text option"""
        if not options.release_notes_file:
            return options.release_notes

        try:
            # newline="" keeps the file contents verbatim; an empty file gives
            # "" which is sent as empty notes, unlike an absent (None) field
            with open(options.release_notes_file, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ValidationError(
                f"Cannot read release notes file contents:\n{e}",
                original_exception=e
            ) from e
