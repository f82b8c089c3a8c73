from ninja_extra.throttling import AnonRateThrottle, UserRateThrottle


class AnonDefaultThrottle(AnonRateThrottle):
    rate = "60/min"


class UserDefaultThrottle(UserRateThrottle):
    rate = "100/min"


class WriteThrottle(UserRateThrottle):
    rate = "100/min"


class UploadThrottle(UserRateThrottle):
    rate = "30/min"


class PublicApiThrottle(AnonRateThrottle):
    rate = "120/min"
