import os
import tempfile

# 日志目录与凭证需在导入 relay_core 之前确定
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "relay_core_test_logs"))
os.environ.pop("OPENAI_API_KEY", None)
os.environ["RELAY_CONFIG_FILE"] = os.path.join(tempfile.gettempdir(), "relay_core_no_config.yaml")
