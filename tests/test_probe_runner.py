import subprocess
import unittest
from unittest.mock import patch

from contracts.errors import (
    NonZeroExitError,
    ProbeError,
    ProbeTimeoutError,
    SpawnFailedError,
)
from core.probe_runner import ProbeRunner


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=["ping"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestProbeRunner(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.runner = ProbeRunner()

    async def asyncTearDown(self):
        self.runner.close()

    def test_build_command_requests_four_echoes(self):
        """Test the ping command sends four echo requests"""
        self.assertEqual(
            self.runner.build_command("google.com"), ["ping", "-c", "4", "google.com"]
        )

    @patch("core.probe_runner.subprocess.run")
    async def test_run_returns_stdout(self, mock_run):
        """Test a successful ping returns stdout"""
        mock_run.return_value = completed(stdout="rtt min/avg/max/mdev = 1/2/3/4 ms")
        output = await self.runner.run("google.com")
        self.assertEqual(output, "rtt min/avg/max/mdev = 1/2/3/4 ms")
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["ping", "-c", "4", "google.com"])
        self.assertFalse(kwargs["shell"])
        self.assertEqual(kwargs["env"]["LC_ALL"], "C")
        self.assertIsNone(kwargs["timeout"])

    @patch("core.probe_runner.subprocess.run")
    async def test_nonzero_exit_carries_stderr(self, mock_run):
        """Test a nonzero exit raises with the stderr text"""
        mock_run.return_value = completed(returncode=2, stderr="ping: unknown host\n")
        with self.assertRaises(NonZeroExitError) as ctx:
            await self.runner.run("nonexistent.invalid")
        self.assertEqual(ctx.exception.returncode, 2)
        self.assertEqual(ctx.exception.stderr, "ping: unknown host")
        self.assertIn("unknown host", str(ctx.exception))

    @patch("core.probe_runner.subprocess.run")
    async def test_missing_binary_is_spawn_failure(self, mock_run):
        """Test a missing ping binary raises SpawnFailedError"""
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "ping")
        with self.assertRaises(SpawnFailedError) as ctx:
            await self.runner.run("google.com")
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)

    @patch("core.probe_runner.subprocess.run")
    async def test_permission_error_is_spawn_failure(self, mock_run):
        """Test a permission error raises SpawnFailedError"""
        mock_run.side_effect = PermissionError("Operation not permitted")
        with self.assertRaises(SpawnFailedError):
            await self.runner.run("google.com")

    @patch("core.probe_runner.subprocess.run")
    async def test_timeout(self, mock_run):
        """Test the configured timeout raises a timeout error"""
        runner = ProbeRunner(timeout=1.5)
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ping", timeout=1.5)
        try:
            with self.assertRaises(ProbeTimeoutError):
                await runner.run("google.com")
            self.assertEqual(mock_run.call_args[1]["timeout"], 1.5)
        finally:
            runner.close()

    @patch("core.probe_runner.subprocess.run")
    async def test_all_failures_are_probe_errors(self, mock_run):
        """Test every runner failure shares one base error"""
        for side_effect in (
            OSError("boom"),
            subprocess.TimeoutExpired(cmd="ping", timeout=1),
        ):
            mock_run.side_effect = side_effect
            with self.assertRaises(ProbeError):
                await self.runner.run("google.com")

    @patch("core.probe_runner.subprocess.run")
    async def test_runs_off_the_event_loop_thread(self, mock_run):
        """Test ping runs on the dedicated worker thread"""
        import threading

        seen = []

        def fake_run(*args, **kwargs):
            seen.append(threading.current_thread().name)
            return completed(stdout="ok")

        mock_run.side_effect = fake_run
        await self.runner.run("google.com")
        self.assertTrue(seen[0].startswith("ping-probe"))
        self.assertNotEqual(seen[0], threading.current_thread().name)


if __name__ == "__main__":
    unittest.main()
