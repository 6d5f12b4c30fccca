"""
Tests for the acpublisher command line

Usage errors and bare invocations exit with status 1; parsed options are
handed to the publish service unchanged.
"""

from unittest.mock import Mock, patch

import pytest

from acpublisher import __version__
from acpublisher.cli import app
from acpublisher.rich_utils.ui_helpers import echo_help, is_bare_invocation


class TestCommandRouting:
    """Top level command routing and usage errors"""

    def test_no_arguments_prints_usage_on_stderr(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            app([])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "uploadApk" in captured.err
        assert captured.out == ""

    def test_unknown_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            app(["uploadIpa"])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "uploadIpa" in captured.err
        assert captured.out == ""

    def test_unknown_option_exits_one(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            app(["uploadApk", "--colour"])

        assert exc_info.value.code == 1
        assert "--colour" in capsys.readouterr().err

    def test_bare_upload_apk_prints_command_help(self, capsys, caplog):
        with patch('acpublisher.cli.commands.upload_apk.PublishService') as service_class:
            with pytest.raises(SystemExit) as exc_info:
                app(["uploadApk"])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Usage" in captured.err
        assert "uploadApk" in captured.err
        assert captured.out == ""
        assert "Token is required" not in caplog.text
        service_class.assert_not_called()

    def test_version(self, capsys):
        app(["version"])

        assert capsys.readouterr().out.strip() == f"acpublisher {__version__}"
        assert __version__ == "1.0.0"


class TestHelpHelpers:
    """Help output and bare invocation detection used by the commands"""

    def test_help_printed_to_stdout_is_sent_to_stderr(self, capsys):
        ctx = Mock()

        def rich_help():
            print("Usage: acpublisher uploadApk [OPTIONS]")
            return ""
        ctx.get_help.side_effect = rich_help

        echo_help(ctx)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Usage: acpublisher uploadApk [OPTIONS]\n"

    def test_plain_help_text_echoed_to_stderr(self, capsys):
        ctx = Mock()
        ctx.get_help.return_value = "Usage: acpublisher [OPTIONS] COMMAND"

        echo_help(ctx)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Usage: acpublisher [OPTIONS] COMMAND\n"

    @pytest.mark.parametrize("sources, expected", [
        (["DEFAULT", "DEFAULT", "DEFAULT"], True),
        (["DEFAULT", "COMMANDLINE", "DEFAULT"], False),
        (["DEFAULT", None], False),
    ])
    def test_bare_invocation(self, sources, expected):
        ctx = Mock()
        ctx.params = {f"param{i}": None for i in range(len(sources))}
        by_name = {
            f"param{i}": (Mock() if source else None)
            for i, source in enumerate(sources)
        }
        for i, source in enumerate(sources):
            if source:
                by_name[f"param{i}"].name = source
        ctx.get_parameter_source.side_effect = lambda name: by_name[name]

        assert is_bare_invocation(ctx) is expected


class TestUploadApkOptions:
    """Option parsing for uploadApk"""

    def setup_method(self):
        self.service_patch = patch('acpublisher.cli.commands.upload_apk.PublishService')
        self.logging_patch = patch('acpublisher.cli.commands.upload_apk.configure_logging')
        self.service_class = self.service_patch.start()
        self.configure_logging = self.logging_patch.start()
        self.service = self.service_class.return_value
        self.service.execute_upload_apk.return_value = 0

    def teardown_method(self):
        self.service_patch.stop()
        self.logging_patch.stop()

    def parsed_options(self):
        return self.service.execute_upload_apk.call_args[0][0]

    def test_long_options(self):
        app([
            "uploadApk",
            "--token", "secret",
            "--owner", "Example",
            "--app", "ExampleApp",
            "--apk", "build/app.apk",
            "--mapping", "build/mapping.txt",
            "--releasenotes", "Bug fixes",
            "--releasenotesfile", "NOTES.md",
        ])

        options = self.parsed_options()
        assert options.token == "secret"
        assert options.owner == "Example"
        assert options.app == "ExampleApp"
        assert options.apk == "build/app.apk"
        assert options.mapping == "build/mapping.txt"
        assert options.release_notes == "Bug fixes"
        assert options.release_notes_file == "NOTES.md"

    def test_single_dash_options(self):
        app(["uploadApk", "-token", "secret", "-owner", "Example", "-app", "ExampleApp", "-apk", "app.apk"])

        options = self.parsed_options()
        assert options.token == "secret"
        assert options.app == "ExampleApp"
        assert options.apk == "app.apk"

    def test_defaults(self):
        app(["uploadApk", "--token", "secret"])

        options = self.parsed_options()
        assert options.owner is None
        assert options.mapping is None
        assert options.release_notes == "Uploaded with acpublisher"
        assert options.release_notes_file is None
        assert options.groups == []
        assert options.verbose is False
        assert options.debug is False

    def test_repeated_groups_keep_order(self):
        app(["uploadApk", "--token", "t", "--group", "beta", "-group", "alpha", "--group", "gamma"])

        assert self.parsed_options().groups == ["beta", "alpha", "gamma"]

    def test_logging_flags(self):
        app(["uploadApk", "--token", "t", "-verbose", "--debug"])

        options = self.parsed_options()
        assert options.verbose is True
        assert options.debug is True
        self.configure_logging.assert_called_once_with(verbose=True, debug=True)
        self.service_class.assert_called_once_with(logger=self.configure_logging.return_value)

    def test_failure_exit_code(self):
        self.service.execute_upload_apk.return_value = 1

        with pytest.raises(SystemExit) as exc_info:
            app(["uploadApk", "--token", "t"])

        assert exc_info.value.code == 1
