"""
WebCalc Web Launcher
Simple script to start the web server
"""
import config
from logging_config import configure_logging


def main():
    configure_logging()

    from api import app

    print("\n" + "="*60)
    print(f"{config.APP_NAME} v{config.VERSION}")
    print("="*60)
    print(f"Server starting on http://{config.WEB_HOST}:{config.WEB_PORT}")
    print(f"Access from this device: http://localhost:{config.WEB_PORT}")
    if config.WEB_HOST == '0.0.0.0':
        print(f"Access from network: http://<your-ip>:{config.WEB_PORT}")
    print("="*60 + "\n")

    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False, threaded=True)


if __name__ == "__main__":
    main()
