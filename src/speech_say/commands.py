#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# commands.py

from dataclasses import dataclass
from typing import List, Optional

from speech_say.errors import UnsupportedPlatform
from speech_say.platforms import PlatformProfile, MACOS, LINUX, WIN32

DEFAULT_DATA_FORMAT = 'LEF32@32000'

# 从标准输入读取全部文本后朗读
WINDOWS_SPEECH_SCRIPT = (
    'Add-Type -AssemblyName System.speech; '
    '$speak = New-Object System.Speech.Synthesis.SpeechSynthesizer; '
    '[Console]::InputEncoding = [System.Text.Encoding]::UTF8; '
    '$speak.Speak([Console]::In.ReadToEnd())'
)


@dataclass
class SpeechCommand:
    """待启动的命令行及需要写入标准输入的内容"""
    argv: List[str]
    piped_data: str = ''

    @property
    def command(self) -> str:
        return self.argv[0]


def _escape_scheme(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')


def _say_args(text: str, voice: Optional[str], rate: Optional[int]) -> List[str]:
    args = []
    if voice:
        args.extend(['-v', voice])
    args.append(text)
    if rate:
        args.extend(['-r', str(rate)])
    return args


def _festival_script(text: str, voice: Optional[str], rate: Optional[int]) -> str:
    """生成通过管道交给 festival 的 Scheme 脚本"""
    script = ''
    if rate:
        script += ("(Parameter.set 'Audio_Command "
                   f"\"aplay -q -c 1 -t raw -f s16 -r $(($SR*{rate}/100)) $FILE\") ")
    if voice:
        script += f'({voice}) '
    script += f'(SayText "{_escape_scheme(text)}")'
    return script


def build_speak_command(profile: PlatformProfile,
                        text: str,
                        voice: Optional[str] = None,
                        rate: Optional[int] = None) -> SpeechCommand:
    """
    按平台构造朗读命令

    Args:
        profile: 当前平台配置
        text: 待朗读的文本
        voice: 语音名称 (可选)
        rate: 已换算好的语速 (可选)

    Returns:
        SpeechCommand: 参数列表和管道数据
    """
    if profile.platform_id == MACOS:
        return SpeechCommand([profile.command] + _say_args(text, voice, rate))

    if profile.platform_id == LINUX:
        return SpeechCommand([profile.command, '--pipe'],
                             _festival_script(text, voice, rate))

    if profile.platform_id == WIN32:
        return SpeechCommand([profile.command, '-Command', WINDOWS_SPEECH_SCRIPT], text)

    raise UnsupportedPlatform(profile.platform_id, 'speak')


def build_export_command(profile: PlatformProfile,
                         text: str,
                         filename: str,
                         voice: Optional[str] = None,
                         rate: Optional[int] = None,
                         data_format: str = DEFAULT_DATA_FORMAT) -> SpeechCommand:
    """构造导出音频文件的命令, 仅 macOS 支持"""
    if not profile.supports_export:
        raise UnsupportedPlatform(profile.platform_id, 'export_to_file')

    args = _say_args(text, voice, rate)
    args.extend(['-o', filename, f'--data-format={data_format}'])
    return SpeechCommand([profile.command] + args)
