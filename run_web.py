"""
Royal Calculator Web API Launcher
Simple script to start the web server
"""
import sys
import os

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

print("Starting Royal Calculator Web API...")
print()

try:
    import api
    import config
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("\nMake sure you have installed the required dependencies:")
    print("  pip install -e .")
    sys.exit(1)

try:
    app = api.create_app()
    print(f"Listening on http://localhost:{config.WEB_PORT}/api")
    app.run(host=config.WEB_HOST, port=config.WEB_PORT, debug=False)
except Exception as e:
    print(f"Error starting server: {e}")
    print("\nTroubleshooting:")
    print("1. Check if another application is using the port")
    print("2. Check firewall settings")
    sys.exit(1)
