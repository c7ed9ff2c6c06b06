# reset_db.py
from mindlog import config
from mindlog.models.database import Base, init_db, make_engine

if __name__ == "__main__":
    engine = make_engine(config.DATABASE_URL)

    print("⚠️ Dropping all existing tables...")
    init_db(engine)
    Base.metadata.drop_all(bind=engine)

    print("✅ Recreating tables from models...")
    init_db(engine)

    print("✅ Database reset complete.")
