#! /usr/bin/env python3
# -*- encoding:utf-8 -*-

import os
from typing import Any

from trieset.util import logger, singleton


@singleton
class Settings(dict[str, Any]):
    """进程级配置，环境变量优先，其余回落到默认值"""
    prefix = 'TRIESET_'
    __default = {
        'log_level': 'INFO',
        'line_separator': '\n',
    }
    _loaded: bool
    def __init__(self) -> None:
        # singleton: only the first construction reads the environment
        if not hasattr(self, '_loaded'):
            super().__init__()
            self.load()

    def load(self) -> 'Settings':
        self.clear()
        for key in self.__default:
            env = os.environ.get(self.prefix + key.upper())
            if env is not None:
                self[key] = env
        level = str(self['log_level']).upper()
        try:
            logger.setLevel(level)
        except ValueError:
            del self['log_level']
            logger.setLevel(self['log_level'])
            logger.warning('unknown log level %r, falling back to %s', level, self['log_level'])
        self._loaded = True
        return self

    def __missing__(self, __key: str) -> Any:
        return self.__default[__key]


Settings()
