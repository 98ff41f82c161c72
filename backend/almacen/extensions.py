# Overview: Flask extension instances shared by the application factory.

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
