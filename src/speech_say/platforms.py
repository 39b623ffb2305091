#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# platforms.py

import sys
from dataclasses import dataclass
from typing import Dict

from speech_say.errors import UnsupportedPlatform

MACOS = 'darwin'
LINUX = 'linux'
WIN32 = 'win32'

# 供调用方按平台判断能力 (例如是否支持导出)
PLATFORMS: Dict[str, str] = {
    'MACOS': MACOS,
    'LINUX': LINUX,
    'WIN32': WIN32,
}


@dataclass(frozen=True)
class PlatformProfile:
    """平台对应的语音命令和基准语速"""
    platform_id: str
    command: str
    base_rate: int
    supports_export: bool = False


_PROFILES: Dict[str, PlatformProfile] = {
    MACOS: PlatformProfile(MACOS, 'say', 175, supports_export=True),
    LINUX: PlatformProfile(LINUX, 'festival', 100),
    WIN32: PlatformProfile(WIN32, 'powershell', 0),  # 不支持调节语速
}


def get_profile(platform_id: str) -> PlatformProfile:
    """根据平台标识获取配置, 未知平台直接抛出 UnsupportedPlatform"""
    try:
        return _PROFILES[platform_id]
    except KeyError:
        raise UnsupportedPlatform(platform_id) from None


def detect_platform() -> str:
    """当前运行平台的标识"""
    return sys.platform
