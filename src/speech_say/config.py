#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# config.py

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml

from speech_say.commands import DEFAULT_DATA_FORMAT

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'SPEECH_SAY_CONFIG'


@dataclass
class SayConfig:
    """语音控制器配置"""
    platform: Optional[str] = None          # 覆盖 sys.platform
    voice: Optional[str] = None             # 默认语音
    speed: Optional[float] = None           # 默认语速倍率
    export_data_format: str = DEFAULT_DATA_FORMAT
    encoding: str = 'ascii'                 # 子进程 stdin/stderr 编码
    strict_stderr: bool = True              # stderr 有输出即视为失败
    stop_timeout: float = 2.0               # close() 等待监视线程的时间(秒)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SayConfig':
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Unknown config key ignored: {key}")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(config_path: Optional[str] = None) -> SayConfig:
    """加载 YAML 配置文件, 失败时返回默认配置"""
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        return SayConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load config {config_path}: {e}")
        return SayConfig()

    if not isinstance(data, dict):
        logger.error(f"Config {config_path} must be a mapping, got {type(data).__name__}")
        return SayConfig()

    return SayConfig.from_dict(data.get('say', data))
