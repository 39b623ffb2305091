#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# test_platforms.py

import unittest

from speech_say import PLATFORMS, SpeechController, UnsupportedPlatform, get_profile


class TestPlatforms(unittest.TestCase):

    def test_profiles(self):
        mac = get_profile('darwin')
        self.assertEqual((mac.command, mac.base_rate, mac.supports_export), ('say', 175, True))

        linux = get_profile('linux')
        self.assertEqual((linux.command, linux.base_rate, linux.supports_export), ('festival', 100, False))

        win = get_profile('win32')
        self.assertEqual((win.command, win.base_rate, win.supports_export), ('powershell', 0, False))

    def test_platform_constants(self):
        self.assertEqual(PLATFORMS, {'MACOS': 'darwin', 'LINUX': 'linux', 'WIN32': 'win32'})

    def test_unknown_platform_is_fatal(self):
        for platform_id in ('sunos5', 'freebsd13', 'cygwin', ''):
            with self.assertRaises(UnsupportedPlatform):
                get_profile(platform_id)

    def test_controller_construction_rejects_unknown_platform(self):
        with self.assertRaises(UnsupportedPlatform):
            SpeechController('aix')

    def test_set_platform(self):
        with SpeechController('darwin') as controller:
            controller.set_platform('linux')
            self.assertEqual(controller.platform, 'linux')
            self.assertEqual(controller.profile.command, 'festival')

            with self.assertRaises(UnsupportedPlatform):
                controller.set_platform('os2')
            # 失败的切换不改变当前平台
            self.assertEqual(controller.platform, 'linux')

    def test_convert_speed(self):
        with SpeechController('darwin') as controller:
            self.assertEqual(controller.convert_speed(1.0), 175)
            self.assertEqual(controller.convert_speed(2.0), 350)
            self.assertEqual(controller.convert_speed(0.5), 88)

        with SpeechController('linux') as controller:
            self.assertEqual(controller.convert_speed(1.0), 100)
            self.assertEqual(controller.convert_speed(1.5), 150)


if __name__ == '__main__':
    unittest.main()
