import atexit

from pymongo import MongoClient

from ..utils.logger import Log


class MongoDB:
    """
    One MongoClient per process, shared by every request.
    Created in init_app, released by close() (registered with atexit).
    """

    def __init__(self):
        self.client = None
        self.db = None
        self._close_registered = False

    def init_app(self, app):
        uri = app.config["MONGO_URI"]
        db_name = app.config["DB_NAME"]

        if self.client is not None:
            self.close()

        self.client = MongoClient(uri)
        self.db = self.client[db_name]
        app.extensions["mongo"] = self

        # one exit hook per instance, however many apps are created
        if not self._close_registered:
            atexit.register(self.close)
            self._close_registered = True

        Log.info(f"[mongo.py][MongoDB][init_app] connected to database {db_name}")

    def get_collection(self, name):
        if self.db is None:
            raise RuntimeError("MongoDB not initialized")
        return self.db[name]

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None


db = MongoDB()
