from apifairy import APIFairy
from flask_sqlalchemy import SQLAlchemy
from flask_marshmallow import Marshmallow
from flask_migrate import Migrate
from flask_cors import CORS
from flask_caching import Cache

db = SQLAlchemy()
migrate = Migrate()
apifairy = APIFairy()
cors = CORS()
cache = Cache()
ma = Marshmallow()
