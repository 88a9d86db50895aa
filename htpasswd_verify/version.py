VERSION = "0.1.0"
HTPASSWD_VERIFY = "htpasswd-verify " + VERSION
