from enum import Enum

class PartnerScope(str, Enum):
    DOMESTIC = "domestic"
    OVERSEAS = "overseas"

class Rating(str, Enum):
    GOOD = "GOOD"
    OK = "OK"
    CAUTION = "CAUTION"
    UNTRUSTWORTHY = "UNTRUSTWORTHY"

class UserRole(str, Enum):
    USER = "user"
    MANAGER = "manager"
    ADMIN = "admin"

class UserStatus(str, Enum):
    PENDING = "pending"        # Signed up, awaiting review
    APPROVED = "approved"
    REJECTED = "rejected"
    DELETED = "deleted"        # Soft-deleted by an administrator

class QuestionSet(str, Enum):
    COMMON = "common"          # Asked for every partner
    OVERSEAS = "overseas"      # Asked only for overseas partners

class PartnerFilter(str, Enum):
    EVALUATED = "evaluated"
    UNEVALUATED = "unevaluated"
    RECENT = "recent"

class PartnerSearchField(str, Enum):
    ALL = "all"
    NAME = "name"
    ORG = "org"
    COUNTRY = "country"
    EMAIL = "email"
    PHONE = "phone"

class BackupFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
