"""
SciCal Scientific Calculator
Main application entry point
"""
import atexit
import logging
import os
import socket
import subprocess
import sys
import tkinter as tk

import config
from gui import SciCalGUI

# Global variable to track API process
api_process = None


def get_local_ip():
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        # doesn't even have to be reachable
        s.connect(('10.255.255.255', 1))
        IP = s.getsockname()[0]
        s.close()
    except OSError:
        IP = '127.0.0.1'
    return IP


def start_api_server():
    """Start the Flask API server in a separate process"""
    global api_process
    try:
        script_dir = os.path.dirname(os.path.abspath(__file__))
        api_path = os.path.join(script_dir, 'api.py')

        api_process = subprocess.Popen(
            [sys.executable, api_path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            creationflags=subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        )
        ip = get_local_ip()
        print(f"API server started (PID: {api_process.pid})")
        print("="*60)
        print(f"Access on this PC:    http://localhost:{config.WEB_PORT}/api")
        print(f"Access on your Phone: http://{ip}:{config.WEB_PORT}/api")
        print("="*60)
    except OSError as e:
        print(f"Failed to start API server: {e}")


def cleanup_api_server():
    """Terminate the API server when the main application exits"""
    global api_process
    if api_process:
        try:
            api_process.terminate()
            api_process.wait(timeout=5)
            print("API server stopped")
        except (OSError, subprocess.TimeoutExpired) as e:
            print(f"Error stopping API server: {e}")
        api_process = None


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if "--no-web" not in sys.argv[1:]:
        start_api_server()
        atexit.register(cleanup_api_server)

    root = tk.Tk()
    SciCalGUI(root)
    root.mainloop()

    cleanup_api_server()


if __name__ == "__main__":
    main()
