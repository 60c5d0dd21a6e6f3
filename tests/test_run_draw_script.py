import importlib.util
import io
import os
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from clubdraw.config import FirestoreConfig
from clubdraw.models import NoPaymentsResult

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_draw.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("run_draw", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@patch("clubdraw.config.load_dotenv")
class TestRunDrawScript(unittest.TestCase):
    def setUp(self) -> None:
        self.script = _load_script()
        self.env = patch.dict(os.environ, {"FIREBASE_URL": "https://fs.example.com"}, clear=True)
        self.env.start()
        self.addCleanup(self.env.stop)

    def _run(self, argv):
        with patch.object(self.script, "load_dotenv"), patch.object(
            self.script, "run_monthly_draw", return_value=NoPaymentsResult(1, 2024)
        ) as mock_run, patch.object(self.script, "FirestoreClient") as mock_client:
            stdout = io.StringIO()
            with redirect_stdout(stdout):
                code = self.script.main(argv)
        return code, mock_run, mock_client, stdout.getvalue()

    def test_zero_quota_is_rejected(self, mock_load_dotenv):
        for value in ("0", "-3", "many"):
            with patch.object(self.script, "load_dotenv"), patch.object(
                self.script, "run_monthly_draw"
            ) as mock_run:
                with redirect_stderr(io.StringIO()) as stderr:
                    with self.assertRaises(SystemExit) as ctx:
                        self.script.main(
                            ["--month", "1", "--year", "2024",
                             "--winners-per-club", value, "--token", "t"]
                        )
            self.assertEqual(ctx.exception.code, 2)
            self.assertIn("--winners-per-club", stderr.getvalue())
            mock_run.assert_not_called()

    def test_explicit_quota_is_passed_through(self, mock_load_dotenv):
        code, mock_run, mock_client, out = self._run(
            ["--month", "1", "--year", "2024", "--winners-per-club", "2", "--token", "t"]
        )
        self.assertEqual(code, 0)
        self.assertEqual(mock_run.call_args.kwargs["winners_per_club"], 2)
        self.assertIn("No confirmed payments", out)
        args, kwargs = mock_client.call_args
        self.assertEqual(args, ("t",))
        self.assertIsInstance(kwargs["config"], FirestoreConfig)

    def test_quota_defaults_to_settings(self, mock_load_dotenv):
        os.environ["DRAW_WINNERS_PER_CLUB"] = "3"
        code, mock_run, _, _ = self._run(["--month", "1", "--year", "2024", "--token", "t"])
        self.assertEqual(code, 0)
        self.assertEqual(mock_run.call_args.kwargs["winners_per_club"], 3)

    def test_month_out_of_range_is_rejected(self, mock_load_dotenv):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                self.script.parse_args(["--month", "13", "--year", "2024"])
        self.assertEqual(ctx.exception.code, 2)

    def test_missing_token(self, mock_load_dotenv):
        with patch.object(self.script, "load_dotenv"), redirect_stderr(io.StringIO()):
            code = self.script.main(["--month", "1", "--year", "2024"])
        self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
