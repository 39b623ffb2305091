#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# test_commands.py

import unittest

from speech_say import UnsupportedPlatform, get_profile
from speech_say.commands import WINDOWS_SPEECH_SCRIPT, build_export_command, build_speak_command


class TestSpeakCommand(unittest.TestCase):

    def test_say_plain(self):
        command = build_speak_command(get_profile('darwin'), 'hello')
        self.assertEqual(command.argv, ['say', 'hello'])
        self.assertEqual(command.piped_data, '')

    def test_say_voice_and_rate(self):
        command = build_speak_command(get_profile('darwin'), 'hello', 'Alex', 350)
        self.assertEqual(command.argv, ['say', '-v', 'Alex', 'hello', '-r', '350'])

    def test_festival_plain(self):
        command = build_speak_command(get_profile('linux'), 'hello')
        self.assertEqual(command.argv, ['festival', '--pipe'])
        self.assertEqual(command.piped_data, '(SayText "hello")')

    def test_festival_voice_and_rate(self):
        command = build_speak_command(get_profile('linux'), 'hello', 'voice_kal_diphone', 150)
        self.assertEqual(
            command.piped_data,
            "(Parameter.set 'Audio_Command \"aplay -q -c 1 -t raw -f s16 -r $(($SR*150/100)) $FILE\") "
            "(voice_kal_diphone) "
            "(SayText \"hello\")")

    def test_festival_escapes_quotes(self):
        command = build_speak_command(get_profile('linux'), 'say "hi" \\o/')
        self.assertEqual(command.piped_data, '(SayText "say \\"hi\\" \\\\o/")')

    def test_powershell(self):
        command = build_speak_command(get_profile('win32'), 'hello', 'ignored')
        self.assertEqual(command.argv, ['powershell', '-Command', WINDOWS_SPEECH_SCRIPT])
        self.assertEqual(command.piped_data, 'hello')
        self.assertIn('System.Speech.Synthesis.SpeechSynthesizer', WINDOWS_SPEECH_SCRIPT)


class TestExportCommand(unittest.TestCase):

    def test_say_export(self):
        command = build_export_command(get_profile('darwin'), 'hello', 'greeting.wav', 'Alex', 175)
        self.assertEqual(command.argv, [
            'say', '-v', 'Alex', 'hello', '-r', '175',
            '-o', 'greeting.wav', '--data-format=LEF32@32000'])

    def test_custom_data_format(self):
        command = build_export_command(get_profile('darwin'), 'hello', 'out.aiff', data_format='BEI16@22050')
        self.assertEqual(command.argv[-1], '--data-format=BEI16@22050')

    def test_export_unsupported(self):
        for platform_id in ('linux', 'win32'):
            with self.assertRaises(UnsupportedPlatform):
                build_export_command(get_profile(platform_id), 'hello', 'greeting.wav')


if __name__ == '__main__':
    unittest.main()
