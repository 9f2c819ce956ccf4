import os

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///energy.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    # Wh generated per kilometre walked (placeholder conversion, no physics model)
    ENERGY_WH_PER_KM = float(os.getenv('ENERGY_WH_PER_KM', '50'))
    CITY_TOP_WALKERS = int(os.getenv('CITY_TOP_WALKERS', '10'))
