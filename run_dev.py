# run_dev.py
import os
import sys
import socket


# Carga .env si existe
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv(".env")


APP_MODULE = os.getenv("APP_MODULE", "app.main:app")


def _lan_ip() -> str:
    """Obtiene IP LAN real sin depender de hostname/DNS."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def _reload_flag() -> bool:
    reload_env = os.getenv("RELOAD")
    if reload_env is not None:
        return reload_env.strip() in ("1", "true", "True", "yes", "on")
    # en Windows el reload con hijos da problemas de sockets
    return not sys.platform.startswith("win")


def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload_flag = _reload_flag()

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    uvicorn.run(
        APP_MODULE,
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["app"],
        reload_excludes=[".venv", ".git", "__pycache__", "media"],
        timeout_keep_alive=30,
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
