from app.main import create_app

app = create_app()


if __name__ == "__main__":
    # Single-threaded: the in-memory state store has no locking.
    app.run(host="0.0.0.0", port=app.config["SETTINGS"].port, threaded=False)
