"""Small two-category competition used across the test-suite."""

COMPETITIONS = [
    {"id": "c-tk", "name": "Tapak Kemah", "isIndividual": False, "isPublished": True,
     "criteria": [{"id": "k1", "name": "Kerapian"}, {"id": "k2", "name": "Kreativitas"}]},
    {"id": "c-pio", "name": "Pionering", "isIndividual": False, "isPublished": True, "criteria": []},
    {"id": "c-pid", "name": "Pidato", "isIndividual": True, "isPublished": True, "criteria": []},
    {"id": "c-sem", "name": "Semaphore", "isIndividual": False, "isPublished": False, "criteria": []},
]

TEAMS = [
    {"id": "t1", "school": "SMPN 1 Bandung", "teamName": "Elang", "type": "Putra",
     "members": ["Andi", "Bayu", "Candra"]},
    {"id": "t2", "school": "SMPN 2 Bandung", "teamName": "Harimau", "type": "Putra",
     "members": ["Dodi", "Eko"]},
    {"id": "t3", "school": "SMPN 3 Bandung", "teamName": "Rajawali", "type": "Putra",
     "members": ["Budi", "Fajar"]},
    {"id": "t4", "school": "SMPN 1 Bandung", "teamName": "Melati", "type": "Putri",
     "members": ["Gita", "Hana", "Indah", "Jihan"]},
]

SCORES = [
    {"teamId": "t1", "competitionId": "c-tk", "judgeId": "j1", "totalScore": 90},
    {"teamId": "t1", "competitionId": "c-tk", "judgeId": "j2", "totalScore": 88},
    {"teamId": "t2", "competitionId": "c-tk", "judgeId": "j1", "totalScore": 80},
    {"teamId": "t3", "competitionId": "c-tk", "judgeId": "j1", "totalScore": 70},
    {"teamId": "t4", "competitionId": "c-tk", "judgeId": "j1", "totalScore": 85},
    {"teamId": "t1", "competitionId": "c-pio", "judgeId": "j1", "totalScore": 60},
    {"teamId": "t2", "competitionId": "c-pio", "judgeId": "j1", "totalScore": 75},
    {"teamId": "t3", "competitionId": "c-pio", "judgeId": "j1", "totalScore": 0},
    {"teamId": "t3", "competitionId": "c-pid", "judgeId": "j2", "totalScore": 95, "memberName": "Budi"},
    {"teamId": "t1", "competitionId": "c-pid", "judgeId": "j2", "totalScore": 88, "memberName": "Andi"},
    {"teamId": "t3", "competitionId": "c-sem", "judgeId": "j1", "totalScore": 99},
]
