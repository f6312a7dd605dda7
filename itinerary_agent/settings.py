import os

try:
    from . import config as _cfg
except ImportError:
    _cfg = None


def cfg_get(name: str, default=None):
    # 优先读取本地配置文件；为空则回退到环境变量
    if _cfg and hasattr(_cfg, name):
        val = getattr(_cfg, name)
        if isinstance(val, str):
            if val.strip():
                return val.strip()
        elif val is not None:
            return val
    return os.environ.get(name, default)
