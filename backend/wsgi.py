from almacen import create_app

app = create_app()


def main():
    # One request at a time: every session shares the single in-memory connection
    app.run(host="127.0.0.1", port=5001, threaded=False)


if __name__ == "__main__":
    main()
