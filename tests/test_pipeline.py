import io
import unittest
from contextlib import redirect_stderr
from unittest import mock

from devstack_provisioner import main as main_module
from devstack_provisioner.lib.command import CommandError
from devstack_provisioner.lib.manifests import ManifestError
from devstack_provisioner.pipeline import run_pipeline


class _RecordingStep:

    def __init__(self, step_id, log, error=None):
        self.step_id = step_id
        self._log = log
        self._error = error

    def run(self, state):
        self._log.append(self.step_id)
        if self._error is not None:
            raise self._error
        return state


class Pipeline(unittest.TestCase):

    def test_steps_run_in_order(self):
        log = []
        steps = [_RecordingStep(s, log) for s in ('10_a', '20_b', '30_c')]
        result = run_pipeline(state={}, steps=steps)
        self.assertEqual(log, ['10_a', '20_b', '30_c'])
        self.assertEqual(result.ran_steps, ['10_a', '20_b', '30_c'])
        self.assertIsNone(result.state['execution']['current_step'])

    def test_failing_step_halts_the_run(self):
        log = []
        state = {}
        steps = [
            _RecordingStep('10_a', log),
            _RecordingStep('20_b', log, error=CommandError(['apt-get', 'install', '-y', 'cockpit'], 100)),
            _RecordingStep('30_c', log),
            ]
        self.assertRaises(CommandError, run_pipeline, state=state, steps=steps)
        self.assertEqual(log, ['10_a', '20_b'])
        self.assertEqual(state['execution']['current_step'], '20_b')
        self.assertEqual(state['execution']['ran_steps'], ['10_a'])


class Main(unittest.TestCase):

    def setUp(self):
        for target, kwargs in [
                ('load_config', {'return_value': {'dry_run': True}}),
                ('configure_logging', {'return_value': 'devstack-provisioner.log'}),
                ]:
            patcher = mock.patch.object(main_module, target, **kwargs)
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_success_exit_code(self):
        log = []
        with mock.patch.object(main_module, 'build_steps', return_value=[_RecordingStep('10_a', log)]):
            self.assertEqual(main_module.main([]), 0)
        self.assertEqual(log, ['10_a'])

    def test_fatal_step_exit_code_and_stderr(self):
        log = []
        steps = [
            _RecordingStep('10_a', log, error=CommandError(['dnf', 'install', '-y', 'cockpit'], 1)),
            _RecordingStep('20_b', log),
            ]
        stderr = io.StringIO()
        with mock.patch.object(main_module, 'build_steps', return_value=steps):
            with mock.patch.object(main_module.logger, 'exception'):
                with redirect_stderr(stderr):
                    self.assertEqual(main_module.main([]), 1)
        self.assertEqual(log, ['10_a'])
        self.assertIn('error: Command failed (1): dnf install -y cockpit', stderr.getvalue())

    def test_root_required_outside_dry_run(self):
        main_module.load_config.return_value = {}
        stderr = io.StringIO()
        with mock.patch.object(main_module.os, 'geteuid', return_value=1000):
            with mock.patch.object(main_module, 'build_steps') as build_steps:
                with redirect_stderr(stderr):
                    self.assertEqual(main_module.main([]), 1)
        build_steps.assert_not_called()
        self.assertIn('must be run as root', stderr.getvalue())

    def test_invalid_config(self):
        main_module.load_config.side_effect = ValueError('Config file must be a mapping/dict')
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            self.assertEqual(main_module.main([]), 1)
        self.assertIn('invalid configuration', stderr.getvalue())

    def test_no_options_accepted(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main_module.main(['--force'])
        self.assertEqual(ctx.exception.code, 2)

    def test_unusable_log_file(self):
        main_module.configure_logging.side_effect = PermissionError(13, 'Permission denied', '/var/log/x.log')
        stderr = io.StringIO()
        with mock.patch.object(main_module, 'build_steps') as build_steps:
            with redirect_stderr(stderr):
                self.assertEqual(main_module.main([]), 1)
        build_steps.assert_not_called()
        self.assertIn('error: [Errno 13] Permission denied', stderr.getvalue())

    def test_broken_manifest_reported_as_error(self):
        log = []
        steps = [_RecordingStep('20_install_console', log, error=ManifestError('Invalid YAML in components.yaml'))]
        stderr = io.StringIO()
        with mock.patch.object(main_module, 'build_steps', return_value=steps):
            with mock.patch.object(main_module.logger, 'exception'):
                with redirect_stderr(stderr):
                    self.assertEqual(main_module.main([]), 1)
        self.assertIn('error: Invalid YAML in components.yaml', stderr.getvalue())
