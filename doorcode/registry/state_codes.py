"""Nigerian state codes and common city names."""

# ISO 3166-2:NG subdivision codes
NIGERIA_STATE_CODES = {
    "Abia": "AB",
    "Adamawa": "AD",
    "Akwa Ibom": "AK",
    "Anambra": "AN",
    "Bauchi": "BA",
    "Bayelsa": "BY",
    "Benue": "BE",
    "Borno": "BO",
    "Cross River": "CR",
    "Delta": "DE",
    "Ebonyi": "EB",
    "Edo": "ED",
    "Ekiti": "EK",
    "Enugu": "EN",
    "Federal Capital Territory": "FC",
    "Gombe": "GO",
    "Imo": "IM",
    "Jigawa": "JI",
    "Kaduna": "KD",
    "Kano": "KN",
    "Katsina": "KT",
    "Kebbi": "KE",
    "Kogi": "KO",
    "Kwara": "KW",
    "Lagos": "LA",
    "Nasarawa": "NA",
    "Niger": "NI",
    "Ogun": "OG",
    "Ondo": "ON",
    "Osun": "OS",
    "Oyo": "OY",
    "Plateau": "PL",
    "Rivers": "RI",
    "Sokoto": "SO",
    "Taraba": "TA",
    "Yobe": "YO",
    "Zamfara": "ZA",
}

# Cities whose name differs from their state's
CITY_STATE_ALIASES = {
    "abuja": "FC",
    "fct": "FC",
    "ikeja": "LA",
    "ikorodu": "LA",
    "lekki": "LA",
    "ibadan": "OY",
    "ogbomosho": "OY",
    "port harcourt": "RI",
    "benin city": "ED",
    "abeokuta": "OG",
    "zaria": "KD",
    "jos": "PL",
    "maiduguri": "BO",
    "calabar": "CR",
    "uyo": "AK",
    "ilorin": "KW",
    "onitsha": "AN",
    "warri": "DE",
}
