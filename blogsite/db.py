from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Integer primary keys and OFFSET binds are signed 64-bit.
MAX_SQL_INTEGER = 2**63 - 1
