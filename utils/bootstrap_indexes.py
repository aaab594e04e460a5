def ensure_indexes(db):
    # studentclasses: one enrollment per student/class/year
    sc = db["studentclasses"]
    sc.create_index([("student", 1), ("class", 1), ("academicYear", 1)], unique=True)
    sc.create_index([("class", 1), ("academicYear", 1), ("status", 1)])

    # classsubjects
    cs = db["classsubjects"]
    cs.create_index(
        [("class", 1), ("subject", 1), ("teacher", 1), ("term", 1), ("academicYear", 1)],
        unique=True,
    )
    cs.create_index([("teacher", 1), ("academicYear", 1), ("term", 1)])

    # users
    users = db["users"]
    users.create_index("email", unique=True)
    users.create_index([("profileId", 1), ("role", 1)])
