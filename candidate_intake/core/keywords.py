"""
Read-only vocabulary used by field detection, correction and validation.

Every table is immutable and built once at import time. Matching semantics live
in text_normalization.contains_keyword(): keywords of three characters or fewer
only match whole words ("hr", "so", "sa"), longer keywords match as substrings.
"""

from types import MappingProxyType
from typing import Dict, Tuple


# ===== FIELD NAMES =====

FIELD_NAMES: Tuple[str, ...] = (
    "name",
    "phone",
    "email",
    "location",
    "position",
    "experience",
    "ctc",
    "expected_salary",
    "notice_period",
    "company",
    "client",
    "spoc",
    "status",
    "source_of_cv",
)

NUMERIC_FIELDS = frozenset({"experience", "ctc", "expected_salary", "notice_period"})
TEXT_FIELDS = tuple(f for f in FIELD_NAMES if f not in NUMERIC_FIELDS)

# Cross-field uniqueness: earlier fields keep a shared value, later ones lose it
UNIQUENESS_PRIORITY: Tuple[str, ...] = (
    "name",
    "email",
    "phone",
    "position",
    "spoc",
    "company",
    "status",
    "source_of_cv",
)


# ===== PLACEHOLDERS =====

PLACEHOLDER_VALUES = frozenset({
    "na", "n/a", "as per company norms", "not specified", "pending", "tbd",
    "unknown", "none", "-", "null", "nil", "wip", "company", "placeholder",
    "test", "dummy", "", "to be decided", "not applicable", "will share",
    "negotiable", "flexible", "open", "competitive",
})

PLACEHOLDER_PREFIXES: Tuple[str, ...] = (
    "as per ", "tbd ", "negotiable", "flexible", "to be", "open", "competitive",
)


# ===== VOCABULARY =====

CITY_KEYWORDS = frozenset({
    "bangalore", "bengaluru", "delhi", "new delhi", "mumbai", "pune",
    "hyderabad", "secunderabad", "chennai", "kolkata", "ahmedabad", "gurgaon",
    "gurugram", "noida", "greater noida", "vadodara", "surat", "jaipur",
    "lucknow", "indore", "nagpur", "bhopal", "chandigarh", "kochi",
    "coimbatore", "visakhapatnam", "trivandrum", "tier", "remote",
    "work from home", "wfh",
})

# Bare city names used by placement repair ("remote" is a location, "tier" is not)
CITY_NAMES = frozenset({
    "bangalore", "bengaluru", "delhi", "mumbai", "pune", "hyderabad",
    "chennai", "kolkata", "ahmedabad", "gurgaon", "gurugram", "noida",
    "vadodara", "surat", "jaipur", "lucknow", "indore", "nagpur", "bhopal",
    "kochi", "remote",
})

POSITION_KEYWORDS = frozenset({
    "developer", "engineer", "manager", "lead", "analyst", "designer",
    "architect", "consultant", "specialist", "executive", "officer",
    "coordinator", "supervisor", "associate", "senior", "junior", "trainee",
    "intern", "director", "head", "ceo", "cfo", "cto", "qa", "tester",
    "business", "sales", "marketing", "hr", "finance", "operations", "so",
    "non fls", "contractor", "freelance", "programmer", "admin",
})

# Job-title vocabulary that makes a resolved name really a position
NAME_AS_POSITION_KEYWORDS = frozenset({
    "developer", "engineer", "manager", "lead", "analyst", "designer",
    "architect", "consultant", "specialist", "executive", "officer",
    "coordinator", "supervisor", "associate", "senior", "junior", "trainee",
    "intern", "director", "head", "ceo", "cfo", "cto", "qa", "tester",
    "business", "sales", "marketing", "hr", "finance", "operations",
})

STATUS_KEYWORDS = frozenset({
    "applied", "interested", "scheduled", "interviewed", "rejected", "joined",
    "pending", "active", "on hold", "not interested", "hold", "selected",
    "offered", "accepted", "declined",
})

SOURCE_KEYWORDS = frozenset({
    "naukri", "linkedin", "referral", "indeed", "walk", "monster",
    "glassdoor", "job portal", "agency", "college", "campus", "email",
    "direct", "recruiter", "internal", "networking", "portal", "social",
    "facebook", "twitter", "instagram", "whatsapp", "recruitment",
    "placement", "consultant", "headhunter",
})

ORG_KEYWORDS = frozenset({
    "pvt", "ltd", "llp", "solutions", "technologies", "systems", "services",
    "company", "corp", "bank", "finance", "insurance", "inc", "pte", "gmbh",
    "sa", "sas", "nv", "ag", "global", "international", "hsbc", "canara",
    "icici", "hdfc", "axis", "kotak", "yes", "equitas", "utkarsh",
    "indusind", "tcs", "infosys", "wipro", "cognizant", "deloitte",
    "accenture", "ibm", "microsoft", "google", "amazon",
})

# Legal-form suffixes; any of these is enough to call a value an organization
ORG_SUFFIXES = frozenset({"ltd", "pvt", "llp", "corp", "inc", "pte", "plc"})

# Vocabulary the semantic gate accepts as proof a company value is an organization
COMPANY_PROOF_KEYWORDS = frozenset({
    "pvt", "ltd", "llp", "inc", "corp", "solutions", "technologies",
    "systems", "services", "company", "bank", "finance", "education",
    "insurance",
})

BANK_FINANCE_KEYWORDS = frozenset({
    "bank", "finance", "credit", "fund", "capital", "investment", "insurance",
})

NOTICE_PHRASE_KEYWORDS = frozenset({
    "immediate", "joiner", "joinnner", "immedidate", "days", "weeks",
    "months", "notice",
})

# Words a resolved name must never contain
NAME_REJECT_KEYWORDS = frozenset({
    "interested", "scheduled", "rejected", "pending", "developer", "engineer",
    "manager", "pvt", "ltd", "bank", "finance", "insurance",
})

# Status words a resolved position must never contain
POSITION_REJECT_KEYWORDS = frozenset({
    "interested", "scheduled", "rejected", "pending", "applied",
})

STATUS_REJECT_CITIES = frozenset({
    "bangalore", "mumbai", "delhi", "pune", "hyderabad", "vadodara", "surat",
})

COMPANY_STATUS_PHRASES: Tuple[str, ...] = (
    "not eligible", "not interested", "dropped", "rejected", "hold",
)

STANDARD_NOTICE_DAYS = frozenset({"0", "7", "15", "30", "45", "60", "90", "120", "180"})


# ===== HEADER VOCABULARY =====

# Substrings that mark a column header as preferring a field when scores tie
HEADER_HINTS: Dict[str, Tuple[str, ...]] = MappingProxyType({
    "name": ("name", "candidate", "employee", "person", "fname", "fullname",
             "applicant", "fls", "non-fls", "non fls"),
    "phone": ("phone", "contact", "mobile", "number", "tel", "telephone",
              "cell", "cellular", "whatsapp"),
    "email": ("email", "e-mail", "emailaddress", "mailid", "mail"),
    "location": ("location", "city", "place", "state", "region", "area"),
    "position": ("position", "job", "role", "designation", "title", "profile", "post"),
    "experience": ("experience", "exp", "yrs", "years", "work_exp",
                   "expertise", "work experience"),
    "ctc": ("ctc", "current salary", "current pay", "salary", "pay",
            "current_salary", "basic", "current ctc"),
    "expected_salary": ("expected", "desired", "target", "expectation",
                        "expected_salary", "offer", "expected ctc"),
    "notice_period": ("notice", "period", "notice_period", "availability",
                      "joindate", "notice period", "days"),
    "company": ("company", "current company", "employer", "organization",
                "firm", "company name"),
    "client": ("client", "project", "account", "placed at", "bank"),
    "spoc": ("spoc", "feedback", "hr", "contact_person", "representative", "poc"),
    "status": ("status", "candidate_status", "stage", "feedback", "remark"),
    "source_of_cv": ("source", "cv", "resume", "origin", "channel", "referral"),
})

# Header words that get a strong boost for person-name candidates
NAME_HEADER_BOOST_WORDS: Tuple[str, ...] = ("fls", "person", "candidate")

# Whole header words marking a column unrelated to any candidate field
UNRELATED_HEADER_WORDS = frozenset({
    "date", "timestamp", "created", "updated", "id", "serial", "row", "sr",
    "sno", "remark", "remarks", "notes", "note", "comment", "comments",
})

# Anchored patterns, checked in order (first field wins)
HEADER_PATTERNS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("name", (r"^(candidate\s*)?name$",
              r"^(full\s*name|employee|person|fls|non[\s-]*fls|candidate)$",
              r"^applicant$")),
    ("email", (r"^e[\s-]?mail", r"^mail\s*(id|address)?$", r"^email[\s_]*(id|address)?$")),
    ("spoc", (r"^(spoc|hr|contact\s*person|poc|recruiter|consultant|team\s*lead|tl)",)),
    ("phone", (r"^(phone|mobile|contact|cell|tel)", r"^(whatsapp|number|contact\s*no)")),
    ("position", (r"^(position|designation|role|job\s*title|title|profile|post)$",)),
    ("expected_salary", (r"^(expected|expectation|desired|target|e\.?ctc|expected\s*(ctc|salary)|offered\s*(ctc|salary))",)),
    ("experience", (r"^(experience|exp(?!ect)|years?\s*(of)?\s*exp|work\s*exp|total\s*exp)", r"^yrs$")),
    ("ctc", (r"^(c\.?t\.?c\.?|current\s*(salary|ctc)|salary|pay|basic|current\s*pay)",)),
    ("notice_period", (r"^(notice|notice\s*period|np|availability|join\s*in|serving\s*notice)",)),
    ("company", (r"^(company|current\s*company|employer|organization|firm|company\s*name|present\s*company)",)),
    ("client", (r"^(client|project|account|placed\s*at|bank|client\s*name|mapping)",)),
    ("location", (r"^(location|city|place|state|region|area|base\s*location|current\s*location|preferred\s*location)",)),
    ("status", (r"^(status|candidate\s*status|stage|result|current\s*status|feedback\s*status)",)),
    ("source_of_cv", (r"^(source|cv\s*source|resume\s*source|origin|channel|source\s*of\s*cv|referral)",)),
)

# Containment fallback for headers the anchored patterns miss; identity fields
# first and "name" last, so "Candidate Email" is an email column
HEADER_FUZZY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("email", ("email", "mail")),
    ("phone", ("phone", "mobile", "contact", "cell", "number")),
    ("expected_salary", ("expected", "expectation", "desired", "ectc")),
    ("ctc", ("ctc", "salary")),
    ("notice_period", ("notice", "np")),
    ("experience", ("experience", "exp")),
    ("company", ("company", "employer")),
    ("client", ("client", "bank", "mapping")),
    ("position", ("position", "role", "designation", "title")),
    ("location", ("location", "city", "place")),
    ("spoc", ("spoc", "poc", "recruiter")),
    ("status", ("status", "stage")),
    ("source_of_cv", ("source",)),
    ("name", ("name", "candidate", "fls")),
)

# Storage-side aliases accepted by single-record re-validation
FIELD_ALIASES: Dict[str, str] = MappingProxyType({
    "contact": "phone",
    "companyName": "company",
    "company_name": "company",
    "expectedCtc": "expected_salary",
    "expectedSalary": "expected_salary",
    "noticePeriod": "notice_period",
    "source": "source_of_cv",
    "sourceOfCV": "source_of_cv",
})


# ===== AUTO-FIX / STORAGE =====

EMAIL_DOMAIN_CORRECTIONS: Dict[str, str] = MappingProxyType({
    "gnail.com": "gmail.com", "gmaill.com": "gmail.com", "gmial.com": "gmail.com",
    "gmai.com": "gmail.com", "gamil.com": "gmail.com", "gmeil.com": "gmail.com",
    "gmail.co": "gmail.com", "gmail.con": "gmail.com", "gmal.com": "gmail.com",
    "gmail.om": "gmail.com", "gamail.com": "gmail.com", "gmali.com": "gmail.com",
    "gmail.cm": "gmail.com", "gmail.cim": "gmail.com", "gemail.com": "gmail.com",
    "yaho.com": "yahoo.com", "yahooo.com": "yahoo.com", "yhaoo.com": "yahoo.com",
    "yahoo.co": "yahoo.com", "yahoo.con": "yahoo.com", "yahooo.in": "yahoo.in",
    "ymail.con": "ymail.com",
    "outlok.com": "outlook.com", "outlookk.com": "outlook.com", "outllook.com": "outlook.com",
    "outlook.co": "outlook.com", "otlook.com": "outlook.com",
    "hotmal.com": "hotmail.com", "hotmai.com": "hotmail.com", "hotmial.com": "hotmail.com",
    "hotmail.co": "hotmail.com", "hotmail.con": "hotmail.com",
    "rediffmal.com": "rediffmail.com", "redifmail.com": "rediffmail.com",
})

STATUS_DISPLAY_LABELS: Dict[str, str] = MappingProxyType({
    "applied": "Applied", "interested": "Interested",
    "scheduled": "Interested and scheduled", "interviewed": "Interview",
    "rejected": "Rejected", "joined": "Joined", "pending": "Applied",
    "active": "Applied", "on hold": "Hold", "not interested": "Rejected",
    "hold": "Hold", "selected": "Offer", "offered": "Offer",
    "accepted": "Offer", "declined": "Rejected", "screening": "Screening",
    "hired": "Hired", "offer": "Offer", "interview": "Interview",
    "dropped": "Dropped",
})

STORAGE_FIELD_NAMES: Dict[str, str] = MappingProxyType({
    "phone": "contact",
    "company": "companyName",
    "expected_salary": "expectedCtc",
    "notice_period": "noticePeriod",
    "source_of_cv": "source",
})
