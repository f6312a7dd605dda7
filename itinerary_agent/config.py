"""
行程规划器的本地配置（可选）。

包含生成服务的 Key、模型与地址，默认币种，Web 会话密钥与会话上限，以及日志级别。
每一项留空时由 settings.cfg_get 回退到同名环境变量，再回退到代码中的默认值。
填入真实 Key 后请勿提交此文件。
"""

# 必填：生成服务（OpenAI 兼容接口）的 API Key，例如："sk-xxxx"
DEEPSEEK_API_KEY = ""

# 可选：模型名、API地址与采样温度
DEEPSEEK_MODEL = ""
DEEPSEEK_API_BASE = ""
LLM_TEMPERATURE = ""

# 费用文本中找不到币种时使用的默认币种；留空则为 IDR
DEFAULT_CURRENCY = ""

# Web 会话签名密钥；若留空，将回退到环境变量 SESSION_SECRET
SESSION_SECRET = ""

# 日志级别（DEBUG / INFO / WARNING）；若留空，将回退到环境变量 LOG_LEVEL
LOG_LEVEL = ""

# 内存中最多保留的 Web 会话数；若留空，将回退到环境变量 MAX_SESSIONS（默认 500）
MAX_SESSIONS = ""
