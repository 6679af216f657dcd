import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'mysql+pymysql://root:@localhost/blood_donation')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv('SECRET_KEY', 'change-me')

    # "exact" keeps donor matching to identical blood groups, "compatible" uses ABO/Rh rules
    BLOOD_GROUP_MATCHING = os.getenv('BLOOD_GROUP_MATCHING', 'exact')
    ELIGIBILITY_COOLDOWN_DAYS = int(os.getenv('ELIGIBILITY_COOLDOWN_DAYS', '90'))

    # Daily job that recomputes donor eligibility flags from last donation dates
    ELIGIBILITY_REFRESH_ENABLED = os.getenv('ELIGIBILITY_REFRESH_ENABLED', 'false').lower() == 'true'
    ELIGIBILITY_REFRESH_HOURS = int(os.getenv('ELIGIBILITY_REFRESH_HOURS', '24'))
    SCHEDULER_API_ENABLED = False


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///blood_donation.db')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    BLOOD_GROUP_MATCHING = 'exact'
    ELIGIBILITY_REFRESH_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4
