# Point discounts granted by warband abilities
MUTANT_DISCOUNT = 1  # speed attribute and natural weapons
HEAVILY_ARMED_DISCOUNT = 1  # every ranged weapon

# Close combat weapons discounted by the Mutants ability
MUTANT_WEAPONS = frozenset({
    "Claws & Teeth",
    "Horrible Claws & Teeth",
    "Whip/Tail",
})

# Equipment that costs nothing for Soldiers warbands
SOLDIER_FREE_EQUIPMENT = frozenset({
    "Grenade",
    "Heavy Armor",
    "Medkit",
})

# Lowest cost any discounted item can reach
MINIMUM_COST = 0
